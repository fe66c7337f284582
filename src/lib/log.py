"""
Centralized logging using Loguru with context-aware verbosity.

LOG() respects the verbosity of whichever ProgramState (or any object with
a ``verbosity`` attribute) was last connected in the current context, so the
engine and the handlers can log without having state passed to them.

Usage:
    from slickcode.lib.log import LOG, state_connectToLogger

    state_connectToLogger(state)
    LOG("Transforming 3 tokens", level=2)
    LOG("Token %%date:Y%% -> 2000", level=3)

With no state connected, messages are dropped unless SLICKCODE_DEBUG_MODE
is set, in which case every level is emitted.
"""

from loguru import logger
from typing import Any, Optional
from contextvars import ContextVar
import sys

from ..config import appsettings

_program_state: ContextVar[Optional[Any]] = ContextVar('program_state', default=None)

logger_format = (
    "<green>{time:HH:mm:ss}</green> │ "
    "<level>{level: <5}</level> │ "
    "<cyan>{function: <20}</cyan> @ "
    "<cyan>{line: <4}</cyan> ║ "
    "<level>{message}</level>"
)

logger.remove()
logger.add(sys.stderr, format=logger_format, level="DEBUG")


def state_connectToLogger(state: Any) -> None:
    """
    Connect a state object to the logging context.

    Args:
        state: Object with a ``verbosity`` attribute (usually ProgramState)
    """
    _program_state.set(state)


def verbosity_current() -> int:
    """Verbosity of the connected state, 0 when nothing is connected"""
    state = _program_state.get()
    if state is not None and hasattr(state, 'verbosity'):
        return state.verbosity
    return 0


def LOG(message: str, level: int = 1, **kwargs: Any) -> None:
    """
    Log message if current state's verbosity allows.

    Args:
        message: Log message to display
        level: Minimum verbosity level required (1=normal, 2=verbose, 3=debug)
        **kwargs: Additional loguru arguments

    Verbosity levels:
        1 = Normal output (default)
        2 = Verbose (-v): per-call token counts, fallbacks
        3 = Debug (-vv or higher): per-token resolution trace
    """
    if appsettings.debug_mode or verbosity_current() >= level:
        logger.opt(depth=1).debug(message, **kwargs)
