import os

import structlog

logger = structlog.get_logger(__name__)

# --- Centralized Shell Constants ---
PROMPT = "wbh> "
WEBHOOK_URL_PREFIX = "https://discord.com/api/webhooks/"
CONFIRMATION_TOKEN = "confirm"
DEFAULT_MESSAGE = "Hello chat"

DEFAULT_HTTP_TIMEOUT = 10.0


def read_http_timeout() -> float:
    """Reads WBH_HTTP_TIMEOUT, falling back to the default when it is unusable."""
    raw_value = os.getenv("WBH_HTTP_TIMEOUT")
    if raw_value is None:
        return DEFAULT_HTTP_TIMEOUT
    try:
        timeout = float(raw_value)
    except ValueError:
        timeout = 0.0
    if timeout <= 0:
        logger.warning(
            "config.timeout.invalid", value=raw_value, default=DEFAULT_HTTP_TIMEOUT
        )
        return DEFAULT_HTTP_TIMEOUT
    return timeout


# Seconds before a webhook request is abandoned.
HTTP_TIMEOUT = read_http_timeout()
