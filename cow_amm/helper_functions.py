"""
This file contains some auxiliary functions.
"""

from __future__ import annotations
import logging
import os
from typing import Optional

LOG_FORMAT = "%(levelname)s - %(message)s"


def get_logger(filename: Optional[str] = None) -> logging.Logger:
    """
    get_logger() returns a logger object that writes to the terminal and, if a filename is
    given, to `<filename>.log`. The level is read from LOG_LEVEL and defaults to INFO.
    """
    logging.basicConfig(format=LOG_FORMAT)
    logger = logging.getLogger()
    logger.setLevel(os.getenv("LOG_LEVEL", "INFO").upper())
    if filename:
        file_handler = logging.FileHandler(filename + ".log", mode="w")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(file_handler)

    return logger


def shorten(data: bytes, length: int = 66) -> str:
    """
    Hex representation of `data`, truncated to `length` characters for log output.
    """
    hex_data = "0x" + bytes(data).hex()
    if len(hex_data) <= length:
        return hex_data
    return hex_data[:length] + f"... ({len(data)} bytes)"
