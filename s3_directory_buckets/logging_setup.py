"""Root logger setup shared by the FastAPI app and the example drivers.

The drivers run outside the app lifespan, so the setup lives here rather than
in ``main.py`` and both call it before the first S3 request.
"""

import logging

LOG_FORMAT = "%(levelname)s: %(message)s"


def ensure_logging(level: int = logging.INFO) -> None:
    """Send log records to stderr as ``LEVEL: message``.

    Installs a handler when the root logger has none. When handlers already
    exist (uvicorn, pytest), only the level and format are changed so records
    are not emitted twice.
    """
    root = logging.getLogger()
    if not root.handlers:
        logging.basicConfig(level=level, format=LOG_FORMAT)
        return

    root.setLevel(level)
    formatter = logging.Formatter(LOG_FORMAT)
    for handler in root.handlers:
        handler.setFormatter(formatter)
