"""Global logging configuration."""

import logging
import logging.config
import sys
from pathlib import Path
from typing import Optional

from app.core.config.settings import settings

CONSOLE_FORMAT = "[%(asctime)s][%(levelname)s] %(name)s: %(message)s"
DETAILED_FORMAT = (
    "[%(asctime)s] - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s"
)
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class LoggerConfig:
    """Global logger configuration manager."""

    _initialized = False

    @classmethod
    def setup_logging(
        cls,
        log_level: str = "INFO",
        log_file: Optional[str] = None,
        log_format: Optional[str] = None,
        use_colors: bool = True,
    ) -> None:
        """Setup global logging configuration."""

        if cls._initialized:
            return

        if log_format is None:
            log_format = CONSOLE_FORMAT

        # Create logs directory if it doesn't exist
        if log_file:
            Path(log_file).parent.mkdir(parents=True, exist_ok=True)

        if use_colors:
            console_formatter = {
                "()": "colorlog.ColoredFormatter",
                "fmt": "%(log_color)s[%(asctime)s][%(levelname)s] %(name)s: %(reset)s%(message)s",
                "datefmt": DATE_FORMAT,
                "log_colors": {
                    "DEBUG": "cyan",
                    "INFO": "green",
                    "WARNING": "yellow",
                    "ERROR": "red",
                    "CRITICAL": "bold_red",
                },
            }
        else:
            console_formatter = {"format": log_format, "datefmt": DATE_FORMAT}

        logging_config = {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "console": console_formatter,
                "detailed": {"format": DETAILED_FORMAT, "datefmt": DATE_FORMAT},
            },
            "handlers": {
                "console": {
                    "class": "logging.StreamHandler",
                    "level": log_level,
                    "formatter": "console",
                    "stream": sys.stdout,
                }
            },
            "root": {"level": log_level, "handlers": ["console"]},
            "loggers": {
                "uvicorn": {
                    "level": "INFO",
                    "handlers": ["console"],
                    "propagate": False,
                },
                "uvicorn.error": {
                    "level": "INFO",
                    "handlers": ["console"],
                    "propagate": False,
                },
                "uvicorn.access": {
                    "level": "INFO",
                    "handlers": ["console"],
                    "propagate": False,
                },
                "pymongo": {
                    "level": "WARNING",
                    "handlers": ["console"],
                    "propagate": False,
                },
            },
        }

        if log_file:
            logging_config["handlers"]["file"] = {
                "class": "logging.handlers.RotatingFileHandler",
                "level": log_level,
                "formatter": "detailed",
                "filename": log_file,
                "maxBytes": 10 * 1024 * 1024,  # 10MB
                "backupCount": 5,
            }
            logging_config["root"]["handlers"].append("file")

            for logger_name in logging_config["loggers"]:
                logging_config["loggers"][logger_name]["handlers"].append("file")

        logging.config.dictConfig(logging_config)
        cls._initialized = True


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance with the given name."""
    return logging.getLogger(name)


# Setup logging on module import
LoggerConfig.setup_logging(
    log_level=settings.log_level,
    log_file=settings.log_file or None,
    use_colors=settings.log_colors,
)
