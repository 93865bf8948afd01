import logging, json, sys, time, os

LOG_LEVEL_ENV = "SECURESTORE_LOG_LEVEL"

_FORMAT = json.dumps({
    "ts": "%(asctime)s",
    "level": "%(levelname)s",
    "name": "%(name)s",
    "msg": "%(message)s"
})


def resolve_level(name=None) -> int:
    """Map a level name (default: $SECURESTORE_LOG_LEVEL) to a logging level, INFO if unknown."""
    if name is None:
        name = os.getenv(LOG_LEVEL_ENV, "INFO")
    level = logging.getLevelName(str(name).strip().upper())
    return level if isinstance(level, int) else logging.INFO


def get_logger(name="securestore", level=None, to_file=None):
    """One-line JSON logger (UTC timestamps) shared by the securestore modules."""
    logger = logging.getLogger(name)
    logger.setLevel(level if isinstance(level, int) else resolve_level(level))

    if not logger.handlers:
        formatter = logging.Formatter(fmt=_FORMAT, datefmt="%Y-%m-%dT%H:%M:%SZ")
        formatter.converter = time.gmtime
        handlers = [logging.StreamHandler(sys.stdout)]
        if to_file:
            os.makedirs(os.path.dirname(to_file) or ".", exist_ok=True)
            handlers.append(logging.FileHandler(to_file))
        for handler in handlers:
            handler.setFormatter(formatter)
            logger.addHandler(handler)

    return logger
