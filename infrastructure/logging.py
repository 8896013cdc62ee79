import logging
import logging.handlers
import sys

import structlog

from infrastructure.config import Settings, settings

STREAM_HANDLER_NAME = "tier_cleaner_stream"
FILE_HANDLER_NAME = "tier_cleaner_file"


def _replace_handler(root_logger: logging.Logger, handler: logging.Handler) -> None:
    for existing in list(root_logger.handlers):
        if existing.get_name() == handler.get_name():
            root_logger.removeHandler(existing)
            existing.close()
    root_logger.addHandler(handler)


def setup_logging(app_settings: Settings | None = None) -> None:
    """Route structlog and stdlib logging to stdout and a rotating file.

    Safe to call more than once: the handlers installed by a previous call
    are replaced, not duplicated.
    """
    app_settings = app_settings or settings

    app_settings.log_dir.mkdir(parents=True, exist_ok=True)
    log_file = app_settings.log_dir / f"{app_settings.app_env}.log"

    shared_processors = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    # Cron and systemd capture stdout; JSON outside development
    if app_settings.app_env == "development":
        renderer = structlog.dev.ConsoleRenderer()
    else:
        renderer = structlog.processors.JSONRenderer()

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared_processors,
        processor=renderer,
    )

    stream_handler = logging.StreamHandler(sys.stdout)
    stream_handler.set_name(STREAM_HANDLER_NAME)
    stream_handler.setFormatter(formatter)

    file_handler = logging.handlers.TimedRotatingFileHandler(
        log_file,
        when="midnight",
        backupCount=7,
    )
    file_handler.set_name(FILE_HANDLER_NAME)
    file_handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    _replace_handler(root_logger, stream_handler)
    _replace_handler(root_logger, file_handler)
    root_logger.setLevel(app_settings.log_level.upper())

    # Storage clients are chatty at INFO
    for logger_name in ("pymongo", "fsspec", "botocore", "s3fs"):
        logging.getLogger(logger_name).setLevel(logging.WARNING)
