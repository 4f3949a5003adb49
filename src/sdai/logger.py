import logging
import re
from typing import Optional

import sdai.config as config

logging.basicConfig(
    level=config.LOGGING_LEVEL,
    format="%(asctime)s [%(levelname)s] [%(name)s %(filename)s:%(lineno)d - %(funcName)s] %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)

ROOT_LOGGER_NAME = "sdai"

# OpenAI / Anthropic ("sk-", "sk-ant-") and Google ("AIza") API keys
_SECRET_PATTERN = re.compile(r"\b(?:sk-[A-Za-z0-9_\-]{8,}|AIza[0-9A-Za-z_\-]{20,})")


class RedactSecretsFilter(logging.Filter):
    """Mask provider API keys that end up in a log message."""

    def filter(self, record: logging.LogRecord) -> bool:
        message = record.getMessage()
        redacted = _SECRET_PATTERN.sub("[REDACTED]", message)
        if redacted != message:
            record.msg = redacted
            record.args = None
        return True


def _with_redaction(log: logging.Logger) -> logging.Logger:
    if not any(isinstance(f, RedactSecretsFilter) for f in log.filters):
        log.addFilter(RedactSecretsFilter())
    return log


logger = _with_redaction(logging.getLogger(ROOT_LOGGER_NAME))

# Shortcut aliases
debug = logger.debug
info = logger.info
warning = logger.warning
error = logger.error
exception = logger.exception


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Package logger, or a child of it (``get_logger(__name__)``) for one module."""

    if not name or name == ROOT_LOGGER_NAME:
        return logger
    if not name.startswith(ROOT_LOGGER_NAME + "."):
        name = f"{ROOT_LOGGER_NAME}.{name}"
    return _with_redaction(logging.getLogger(name))
