# core/logging.py
import logging
from typing import Optional

from config.settings import settings

_CONFIGURED = False


def configure_logging(level: Optional[str] = None) -> None:
    """ติดตั้ง stream handler เดียวให้ root logger (เรียกซ้ำได้ ไม่ซ้อน handler)"""
    global _CONFIGURED
    lvl = (level or settings.LOG_LEVEL or "INFO").upper()
    root = logging.getLogger()
    root.setLevel(lvl)
    if _CONFIGURED:
        return

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(settings.LOG_FORMAT))
    root.addHandler(handler)
    _CONFIGURED = True
