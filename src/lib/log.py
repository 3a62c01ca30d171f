"""
Verbosity-gated logging for the regeneration pipeline

The CLI connects its ProgramState once; parser, writer and regenerator code
then calls LOG() without carrying the state around. With no state connected
(library use, tests) LOG() is silent.

    state_connectToLogger(state)
    LOG("Outputting regenerated page ...", level=1)
    LOG("Renaming file to backup ...", level=2)
    LOG("Directive at line 12 ...", level=3)
"""

import sys
from contextvars import ContextVar
from typing import Any, Optional

from loguru import logger

# Per-context, so documents regenerated on separate threads keep their own verbosity
_connectedState: ContextVar[Optional[Any]] = ContextVar('regenerate_state', default=None)

logger.remove()
logger.add(
    sys.stderr,
    format=(
        "<green>{time:HH:mm:ss}</green> │ "
        "<level>{level: <5}</level> │ "
        "<cyan>{module}.{function}</cyan>:<cyan>{line}</cyan> ║ "
        "<level>{message}</level>"
    ),
    level="DEBUG",
)


def state_connectToLogger(state: Any) -> None:
    """Make a ProgramState's verbosity govern LOG() in the current context"""
    _connectedState.set(state)


def LOG(message: str, level: int = 1, **kwargs: Any) -> None:
    """
    Emit a message when the connected verbosity reaches the level.

    Levels: 1 progress, 2 file operations (-v), 3 per-directive detail (-vv)
    """
    state = _connectedState.get()
    if state is not None and getattr(state, 'verbosity', 0) >= level:
        logger.opt(depth=1).debug(message, **kwargs)
