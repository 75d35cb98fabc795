import logging
import pathlib
import sys

import pendulum
import seqlog

from liquid.core.config import settings

_root_logger = logging.getLogger()


def get_log_path(filename: str) -> pathlib.Path:
    if settings.LOG_DIR:
        path = f"{settings.LOG_DIR}/{filename}.log"
    elif sys.platform == "linux":
        path = f"/app-logs/{filename}.log"
    else:
        path = f"~/logs/{filename}.log"

    return pathlib.Path(path).expanduser()


def setup_logging_to_file(
    app: str,
    level: int = logging.INFO,
    *,
    logger: logging.Logger = _root_logger,
    timestamp: bool = True,
) -> pathlib.Path:
    formatter = logging.Formatter(
        "%(asctime)s.%(msecs)03d [%(levelname)s] %(name)s.%(funcName)s:%(lineno)d %(message)s"
    )
    if timestamp:
        filename = f"{app}.{pendulum.now():%Y%m%d.%H%M%S.%f}"
    else:
        filename = app
    log_path = get_log_path(filename)
    log_path.parent.mkdir(parents=True, exist_ok=True)
    file_handler = logging.FileHandler(log_path)
    file_handler.formatter = formatter
    logger.setLevel(level)
    logger.addHandler(file_handler)
    return log_path


def setup_logging_to_console(level=logging.INFO, *, logger: logging.Logger = _root_logger):
    if not sys.stdout.isatty():
        return

    from rich.logging import RichHandler
    from rich.traceback import install

    install(show_locals=True)
    logger.setLevel(level)
    handler = RichHandler(rich_tracebacks=True, level=level, show_time=True)
    logger.addHandler(handler)


def setup_seqlog() -> bool:
    """Ship logs to Seq when a server is configured."""
    if not settings.seq_enabled:
        return False
    if pathlib.Path(settings.SEQLOG_CONFIG_PATH).exists():
        seqlog.configure_from_file(settings.SEQLOG_CONFIG_PATH)
    else:
        seqlog.log_to_seq(
            server_url=settings.SEQ_SERVER_URL,
            api_key=settings.SEQ_SERVER_API_KEY,
            level=logging.INFO,
            batch_size=10,
            auto_flush_timeout=2,
        )
    seqlog.set_global_log_properties(
        Application=settings.PROJECT_NAME, Environment=settings.ENVIRONMENT_NAME
    )
    return True


def setup_logging(app: str, level: int = logging.INFO, *, to_file: bool = False):
    setup_logging_to_console(level)
    if to_file:
        setup_logging_to_file(app, level)
    setup_seqlog()
