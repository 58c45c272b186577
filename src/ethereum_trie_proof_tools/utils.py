"""
Utilities for the trie proof tools.
"""

import logging
from typing import Union


def get_stream_logger(
    name: str, level: Union[int, str] = logging.INFO
) -> logging.Logger:
    """
    Get a logger that writes to stderr.
    """
    logger = logging.getLogger(name)
    if not logger.handlers:
        stream_handler = logging.StreamHandler()
        formatter = logging.Formatter("%(levelname)s:%(name)s:%(message)s")
        stream_handler.setFormatter(formatter)
        logger.addHandler(stream_handler)
    logger.setLevel(level=level)

    return logger
