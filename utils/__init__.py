from utils.logger import logger

__all__ = [
    "logger",
]
