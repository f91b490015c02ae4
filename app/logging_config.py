import logging
import sys

from app.config import Settings
from app.errors import ConfigError

LOG_FORMAT = "%(asctime)s NVR-API: %(levelname)s %(name)s - %(message)s"


def setup_logging(settings: Settings) -> logging.Handler:
    if settings.log_to_stdout:
        handler: logging.Handler = logging.StreamHandler(sys.stdout)
    else:
        try:
            handler = logging.FileHandler(settings.log_file, mode="a", encoding="utf-8")
        except OSError as e:
            raise ConfigError(f"failed to open log file {settings.log_file}: {e}") from e

    logging.basicConfig(
        level=settings.log_level.upper(),
        format=LOG_FORMAT,
        handlers=[handler],
        force=True,
    )
    return handler
