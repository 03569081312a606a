import logging

from app.config import settings

LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


def configure_logging(level: str | None = None) -> None:
    """
    Install a single stream handler on the root logger.

    Safe to call more than once (uvicorn reload, tests); existing handlers
    are replaced rather than duplicated.
    """
    logging.basicConfig(
        level=(level or settings.LOG_LEVEL).upper(),
        format=LOG_FORMAT,
        force=True,
    )
    # SQL echo goes through sqlalchemy.engine; keep it quiet unless DEBUG.
    if not settings.DEBUG:
        logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
