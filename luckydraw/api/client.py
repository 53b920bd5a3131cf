import logging
from urllib.parse import quote, urljoin
from typing import Any, Mapping, Optional

import requests

from .utils import open_session, resolve_api_base

logger = logging.getLogger(__name__)


class LuckyDrawClient:
    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: int = 30,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = resolve_api_base(base_url)
        self.session = session if session is not None else open_session()
        self.timeout = timeout

    # -------- headers --------
    @property
    def json_headers(self) -> Mapping[str, str]:
        return {"Accept": "application/json", "Content-Type": "application/json"}

    # -------- core request --------
    def _request(
        self,
        method: str,
        path: str,
        *,
        json: Optional[Any] = None,
    ) -> Any:
        url = urljoin(self.base_url + "/", path.lstrip("/"))
        logger.debug("%s %s", method.upper(), url)
        try:
            r = self.session.request(
                method=method.upper(),
                url=url,
                headers=self.json_headers,
                json=json,
                timeout=self.timeout,
            )
            r.raise_for_status()
        except requests.RequestException as e:
            logger.critical(f"Backend request {method.upper()} {url} failed: {e}")
            raise
        return r.json() if r.content else None

    @staticmethod
    def _item_path(collection: str, item_id: str) -> str:
        return f"/{collection}/{quote(str(item_id), safe='')}"

    # -------- participants --------
    def list_participants(self) -> list[dict]:
        return self._request("GET", "/participants") or []

    def create_participant(self, data: dict) -> dict:
        return self._request("POST", "/participants", json=data)

    def update_participant(self, participant_id: str, data: dict) -> dict:
        return self._request(
            "PUT", self._item_path("participants", participant_id), json=data
        )

    def delete_participant(self, participant_id: str) -> None:
        self._request("DELETE", self._item_path("participants", participant_id))

    # -------- winners --------
    def list_winners(self) -> list[dict]:
        return self._request("GET", "/winners") or []

    def create_winner(self, data: dict) -> dict:
        return self._request("POST", "/winners", json=data)

    def delete_winner(self, winner_id: str) -> None:
        self._request("DELETE", self._item_path("winners", winner_id))
