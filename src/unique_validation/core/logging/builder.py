"""
Logging builder: build a dictConfig mapping from Settings and apply it.

Handlers by settings:
| LOG_TO_STDOUT | LOG_DIR set | Active handlers                |
| ------------- | ----------- | ------------------------------ |
| true          | any         | console + error_console        |
| false         | no          | console + error_console        |
| false         | yes         | console + file + error_file    |

The driver's loggers ("pymongo") stay at WARNING unless ENABLE_DRIVER_LOGGING,
since command logs can carry document values.
"""

from __future__ import annotations

from pathlib import Path
import logging
import logging.config

from unique_validation.utils.project import get_project_name

from .formatters import JsonFormatter, ColorFormatter
from .filters import RequestIdFilter, RedactFilter
from .handlers import (
    get_console_handler,
    get_file_handler,
    get_error_file_handler,
    get_error_console_handler,
)

# Settings type only; get_settings() is not called here to avoid import-time side effects
from unique_validation.config.settings import Settings


def _use_files(settings: Settings) -> bool:
    return (not settings.LOG_TO_STDOUT) and bool(settings.LOG_DIR)


def make_dict_config(settings: Settings) -> dict:
    """
    Build the dictConfig mapping: "standard" and "json" formatters, "request_id"
    and "redact" filters, handlers per the table above, and loggers for the root,
    this package and the MongoDB driver.
    """
    formatters = {
        "standard": {
            "()": ColorFormatter if settings.LOG_FORMAT == "text" else logging.Formatter,
            "format": "%(asctime)s | %(levelname)s | %(name)s | %(request_id)s | %(message)s",
        },
        "json": {
            "()": JsonFormatter,
            "env": settings.ENV,
            "service": get_project_name(),
        },
    }

    filters = {
        "request_id": {"()": RequestIdFilter},
        "redact": {"()": RedactFilter},
    }

    handlers: dict[str, dict] = {"console": get_console_handler(settings)}
    if _use_files(settings):
        handlers["file"] = get_file_handler(settings)
        handlers["error_file"] = get_error_file_handler(settings)
    else:
        handlers["error_console"] = get_error_console_handler(settings)

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": formatters,
        "filters": filters,
        "handlers": handlers,
        "loggers": {
            "": {
                "handlers": list(handlers.keys()),
                "level": settings.LOG_LEVEL,
                "propagate": True,
            },
            "unique_validation": {
                "level": settings.LOG_LEVEL,
                "propagate": True,
            },
            "pymongo": {
                "level": "DEBUG" if settings.ENABLE_DRIVER_LOGGING else "WARNING",
                "handlers": ["console"],
                "propagate": False,
            },
        },
    }


def setup_logging(settings: Settings) -> None:
    """
    Create LOG_DIR when logging to files, apply the dictConfig and attach a
    RequestIdFilter to the root logger so %(request_id)s is always resolvable.
    """
    if _use_files(settings):
        Path(settings.LOG_DIR).mkdir(parents=True, exist_ok=True)

    logging.config.dictConfig(make_dict_config(settings))
    logging.getLogger().addFilter(RequestIdFilter())
