# --- src/logictest_core/log_config.py ---
import logging
import sys
from typing import IO, Optional, Union

LOG_FORMAT = "%(asctime)s [%(levelname)-5.5s] [%(name)s] %(message)s"


def setup_logging(level: Union[int, str] = logging.INFO, stream: Optional[IO[str]] = None):
    """
    Configures logging to a single console handler (stdout unless `stream` is given).

    `level` may be a numeric level or a level name such as "DEBUG".
    Any handlers already attached to the root logger are replaced.
    """
    if isinstance(level, str):
        resolved = logging.getLevelName(level.upper())
        if not isinstance(resolved, int):
            raise ValueError(f"Unknown logging level name: {level!r}")
        level = resolved

    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
        handler.close()

    console_handler = logging.StreamHandler(stream if stream is not None else sys.stdout)
    console_handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root_logger.setLevel(level)
    root_logger.addHandler(console_handler)
    logging.getLogger(__name__).debug("Logging configured at level %s.", logging.getLevelName(level))
