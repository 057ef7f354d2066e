# -----------------------------------------------------------------------------
# app/utils/logger.py — Service logger; `extra` fields rendered as key=value
# -----------------------------------------------------------------------------

import logging
import sys

LOGGER_NAME = "prompt_builder"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"

_RESERVED = set(logging.LogRecord("", 0, "", 0, "", (), None).__dict__) | {"message", "asctime"}


class ExtraFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        base = super().format(record)
        extras = {k: v for k, v in record.__dict__.items() if k not in _RESERVED}
        if not extras:
            return base
        rendered = " ".join(f"{k}={v}" for k, v in sorted(extras.items()))
        head, sep, tail = base.partition("\n")
        return f"{head} {rendered}{sep}{tail}"


def configure_logging(level: str = "INFO") -> None:
    log = logging.getLogger(LOGGER_NAME)
    if not log.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(ExtraFormatter(LOG_FORMAT))
        log.addHandler(handler)
    log.setLevel(level.upper())


logger = logging.getLogger(LOGGER_NAME)
