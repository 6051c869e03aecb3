"""Execution events emitted by the pipeline executor."""

from dataclasses import dataclass, field
from typing import List, Tuple, Union

from .exceptions import SwarmError
from .models import StepResult


@dataclass(frozen=True)
class StepStarted:
    """A step is about to call the agent endpoint."""

    step_id: str
    index: int


@dataclass(frozen=True)
class StepCompleted:
    """A step finished; ``total_units`` is the running total including it."""

    result: StepResult
    total_units: int


@dataclass(frozen=True)
class RunFailed:
    """The run stopped on an error. Terminal."""

    error: SwarmError
    partial_results: Tuple[StepResult, ...] = field(default_factory=tuple)

    @property
    def message(self) -> str:
        return str(self.error)

    @property
    def total_units(self) -> int:
        return sum(r.total_units for r in self.partial_results)


@dataclass(frozen=True)
class RunCancelled:
    """The run was stopped by the caller. Terminal, not an error."""

    partial_results: Tuple[StepResult, ...] = field(default_factory=tuple)

    @property
    def total_units(self) -> int:
        return sum(r.total_units for r in self.partial_results)


@dataclass(frozen=True)
class RunCompleted:
    """Every step finished. Terminal."""

    results: Tuple[StepResult, ...]
    total_units: int


ExecutionEvent = Union[StepStarted, StepCompleted, RunFailed, RunCancelled, RunCompleted]

TERMINAL_EVENTS = (RunFailed, RunCancelled, RunCompleted)


def is_terminal(event: ExecutionEvent) -> bool:
    return isinstance(event, TERMINAL_EVENTS)


def results_of(event: ExecutionEvent) -> List[StepResult]:
    """Results carried by a terminal event (empty for progress events)."""
    if isinstance(event, RunCompleted):
        return list(event.results)
    if isinstance(event, (RunFailed, RunCancelled)):
        return list(event.partial_results)
    return []
