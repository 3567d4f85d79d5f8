import logging
from quizmaster.config import settings

def configure_logging() -> logging.Logger:
    """Configure basic logging for the API and return the package logger"""
    level = logging.DEBUG if settings.debug else getattr(logging, settings.log_level.upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )
    return logging.getLogger("quizmaster")
