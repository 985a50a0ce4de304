"""Find files and directories downwards from one or more roots."""

from loguru import logger

from finddown.engine import find_down, find_down_all
from finddown.models import BREAK, INCLUDE, SKIP, VFile, VisitOutcome

# Applications opt in with logger.enable("finddown").
logger.disable("finddown")

__all__ = [
    "BREAK",
    "INCLUDE",
    "SKIP",
    "VFile",
    "VisitOutcome",
    "find_down",
    "find_down_all",
]
