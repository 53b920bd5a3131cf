import os
import logging
from typing import Optional

import requests
from dotenv import load_dotenv

logger = logging.getLogger(__name__)

DEFAULT_API_BASE = "https://luckydraw-backend-qqq3.onrender.com"


def resolve_api_base(base_url: Optional[str] = None) -> str:
    """Return the backend base URL without a trailing slash.

    Resolution order is the explicit ``base_url`` argument, then the
    ``LUCKYDRAW_API_BASE`` environment variable (``.env`` is loaded first),
    then :data:`DEFAULT_API_BASE`.

    Raises
    ------
    ValueError
        If the resolved value is not an http(s) URL.
    """
    load_dotenv()
    url = (base_url or os.getenv("LUCKYDRAW_API_BASE") or DEFAULT_API_BASE).strip()
    if not url.startswith(("http://", "https://")):
        raise ValueError(f"Backend URL must start with http:// or https://, got {url!r}")
    return url.rstrip("/")


def open_session() -> requests.Session:
    """Open a requests session preconfigured for the JSON backend.

    Returns
    -------
    requests.Session
        Session sending ``Accept: application/json`` on every request.
    """
    session = requests.Session()
    session.headers.update({"Accept": "application/json"})
    logger.debug("Opened backend HTTP session")
    return session
