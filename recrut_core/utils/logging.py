from __future__ import annotations
import logging
import os
from typing import Optional


def _default_level() -> int:
    lvl = os.getenv("RECRUT_LOG_LEVEL", "INFO").upper()
    return getattr(logging, lvl, logging.INFO)


class _ExtraFormatter(logging.Formatter):
    # Champs standards d'un LogRecord, pour isoler ceux passés via extra={...}
    _RESERVED = set(vars(logging.LogRecord("", 0, "", 0, "", (), None))) | {"message", "asctime"}

    def format(self, record: logging.LogRecord) -> str:
        base = super().format(record)
        extra = {k: v for k, v in vars(record).items() if k not in self._RESERVED}
        if extra:
            return f"{base} | extra={extra}"
        return base


def get_logger(name: Optional[str] = None) -> logging.Logger:
    logger = logging.getLogger(name or "recrut")
    if not logger.handlers:
        handler = logging.StreamHandler()
        fmt = os.getenv("RECRUT_LOG_FORMAT", "%(asctime)s %(levelname)s %(name)s: %(message)s")
        handler.setFormatter(_ExtraFormatter(fmt))
        logger.addHandler(handler)
        logger.setLevel(_default_level())
        logger.propagate = False
    return logger
