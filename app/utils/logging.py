"""로깅 설정 유틸리티.

Logging configuration utility.
Builds the application logger carried by the AppContext. Request-level
structured events go to Axiom through AxiomLoggingMiddleware; this logger
covers diagnostic messages (REST request traces, unexpected failures).

Usage:
    logger = configure_logging(settings)
    logger.debug("REST request to save Image : %s", payload)
"""

import logging
import sys

from app.config import Settings

LOGGER_NAME = "quizpractice"

_FORMAT = "%(asctime)s %(levelname)-5s [%(name)s] %(message)s"


def configure_logging(settings: Settings) -> logging.Logger:
    """애플리케이션 로거를 구성합니다.

    Configure and return the application logger.
    Calling this more than once (one app per test) does not stack handlers.

    Args:
        settings: 애플리케이션 설정 (LOG_LEVEL is read from here)

    Returns:
        logging.Logger: 구성된 로거 (Configured logger)
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(settings.LOG_LEVEL.upper())

    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(_FORMAT))
        logger.addHandler(handler)

    return logger
