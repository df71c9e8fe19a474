import logging
import logging.config


def build_logging_config(level="INFO"):
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "default": {
                "format": "%(name)s - %(message)s",
                "datefmt": "%Y-%m-%d %H:%M:%S",
            },
        },
        "handlers": {
            "default": {
                "class": "rich.logging.RichHandler",
                "formatter": "default",
                "level": "DEBUG",
                "rich_tracebacks": True,
                "show_time": True,
                "show_path": False,
                "log_time_format": "%Y-%m-%d %H:%M:%S",
            },
        },
        "loggers": {
            "werkzeug": {"handlers": ["default"], "level": "INFO", "propagate": False},
            "sqlalchemy.engine": {"handlers": ["default"], "level": "WARNING", "propagate": False},
            "": {"handlers": ["default"], "level": level},
        },
    }


def configure_logging(app):
    level = str(app.config.get("LOG_LEVEL", "INFO")).upper()
    logging.config.dictConfig(build_logging_config(level))
    app.logger.setLevel(level)
