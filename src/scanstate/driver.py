"""State-machine driver.

A state function takes the Scanner, does some work on it and returns the next
state function, or None to stop. The driver is a trampoline: it calls states
in a flat loop, so arbitrarily long chains never grow the Python stack.

Termination:
- the state returned None, or the cursor halted at the end of input: success
- the cursor recorded a diagnostic via fail(): the ParseError is raised

The driver does not detect states that loop without consuming input. Each
state must make progress.

"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, TypeAlias

from scanstate.errors import ParseError
from scanstate.profiling import get_scan_accumulator
from scanstate.utils.logger import get_logger

if TYPE_CHECKING:
    from scanstate.scanner import Scanner

logger = get_logger(__name__)

StateFn: TypeAlias = Callable[["Scanner"], "StateFn | None"]


def _state_name(state: StateFn) -> str:
    return getattr(state, "__qualname__", None) or repr(state)


def run(scanner: Scanner, start: StateFn) -> None:
    """Run state functions from start until the machine stops.

    Args:
        scanner: Scanner shared by every state of this run
        start: First state function

    Raises:
        ParseError: If a state recorded a diagnostic
    """
    trace = scanner.config.trace_states
    steps = 0
    state: StateFn | None = start

    while state is not None and scanner.halt is None:
        if trace:
            logger.debug("-> %s at %s", _state_name(state), scanner.location())
        state = state(scanner)
        steps += 1

    halt = scanner.halt
    failed = isinstance(halt, ParseError)

    acc = get_scan_accumulator()
    if acc is not None:
        acc.record_run(source_length=len(scanner.input), steps=steps, failed=failed)

    if failed:
        logger.debug("Scan failed after %d steps at %s", steps, halt.location)
        raise halt

    logger.debug("Scan finished after %d steps (halt=%r)", steps, halt)
