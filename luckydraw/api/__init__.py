from .client import LuckyDrawClient

__all__ = ["LuckyDrawClient"]
