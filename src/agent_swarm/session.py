"""Caller-side view of the swarm: pipeline selection, run state and history.

The executor itself holds no state between runs. A session keeps the
projection an interactive front end needs: which pipeline is selected, the
custom step list, progress of the active run and the history of finished
runs.
"""

from typing import Iterator, List, Optional

from .agents import DEFAULT_PRESET
from .cancellation import CancellationToken
from .events import (
    ExecutionEvent,
    RunCancelled,
    RunCompleted,
    RunFailed,
    StepCompleted,
    StepStarted,
)
from .exceptions import InvalidRunRequest, UnknownStepError
from .executor import PipelineExecutor
from .history import RunHistory
from .logging_utils import LogContext, get_context_logger
from .models import (
    CustomPipeline,
    HistoryEntry,
    PipelineDefinition,
    PipelinePreset,
    PipelineRun,
    StepResult,
)


class SwarmSession:
    """Interactive state around a :class:`PipelineExecutor`.

    Attributes:
        pipeline: The selected preset, or the custom pipeline.
        custom: The user-assembled step list (kept across preset switches).
        task: Task description of the active or last recalled run.
        current_step: Step id currently executing, if any.
        results: Results of the active or last recalled run.
        total_units: Token total of the active or last recalled run.
        error: Failure message of the last run, if it failed.
        is_running: Whether a run is in progress.
    """

    def __init__(
        self,
        executor: PipelineExecutor,
        history: Optional[RunHistory] = None,
        preset: str = DEFAULT_PRESET,
    ):
        self.logger = get_context_logger(__name__)
        self.executor = executor
        self.registry = executor.registry
        self.history = history or RunHistory()

        self.custom = CustomPipeline()
        self.pipeline: PipelineDefinition = self.registry.get_preset(preset)

        self.task = ""
        self.current_step: Optional[str] = None
        self.results: List[StepResult] = []
        self.total_units = 0
        self.error: Optional[str] = None
        self.is_running = False
        self._token: Optional[CancellationToken] = None

    # Pipeline selection

    def select_preset(self, name: str) -> PipelinePreset:
        """Switch to a named preset.

        Raises:
            UnknownPresetError: If the preset is not registered.
        """
        preset = self.registry.get_preset(name)
        self.pipeline = preset
        return preset

    def select_custom(self) -> CustomPipeline:
        self.pipeline = self.custom
        return self.custom

    def toggle_step(self, step_id: str) -> List[str]:
        """Add or remove a step from the custom pipeline and select it.

        Raises:
            UnknownStepError: If the step id is not registered.
        """
        if not self.registry.has_step(step_id):
            raise UnknownStepError(step_id)
        self.pipeline = self.custom
        return self.custom.toggle(step_id)

    @property
    def active_steps(self) -> List[str]:
        return list(self.pipeline.steps)

    @property
    def pipeline_label(self) -> str:
        return self.pipeline.label

    # Running

    def run(self, task: str) -> Iterator[ExecutionEvent]:
        """Start a run of the selected pipeline and return its event stream.

        The request is validated immediately, but session state only
        changes once the stream is consumed, so a stream that is never
        iterated leaves the session untouched. Completed runs, and cancelled
        runs with at least one finished step, are recorded in history.

        Raises:
            InvalidRunRequest: If a run is already active, the task is blank
                or the selected pipeline is empty. Starting a second stream
                while another is being consumed raises on its first ``next()``.
        """
        if self.is_running:
            raise InvalidRunRequest("A run is already in progress")

        token = CancellationToken()
        steps = self.active_steps
        events = self.executor.execute(task, steps, token)
        run = PipelineRun(task_description=task, steps=steps)
        return self._track(events, run, self.pipeline_label, token)

    def stop(self) -> None:
        """Request cancellation of the active run. Safe to call repeatedly."""
        if self._token is not None:
            self._token.cancel()
            self.logger.info("Stop requested", extra={"current_step": self.current_step})

    def _track(
        self,
        events: Iterator[ExecutionEvent],
        run: PipelineRun,
        label: str,
        token: CancellationToken,
    ) -> Iterator[ExecutionEvent]:
        if self.is_running:
            raise InvalidRunRequest("A run is already in progress")

        self.task = run.task_description
        self.results = []
        self.total_units = 0
        self.error = None
        self.current_step = None
        self.is_running = True
        self._token = token
        try:
            for event in events:
                with LogContext(pipeline=label, task=run.task_description[:60]):
                    self._apply(event, run, label)
                yield event
        finally:
            self.is_running = False
            self.current_step = None
            self._token = None

    def _apply(self, event: ExecutionEvent, run: PipelineRun, label: str) -> None:
        if isinstance(event, StepStarted):
            self.current_step = event.step_id
        elif isinstance(event, StepCompleted):
            run.add_result(event.result)
            self.results = list(run.results)
            self.total_units = run.total_units
            self.current_step = None
        elif isinstance(event, RunCompleted):
            self._record(run, label)
        elif isinstance(event, RunCancelled):
            run.cancelled = True
            if run.results:
                self._record(run, label)
        elif isinstance(event, RunFailed):
            self.error = event.message
            self.logger.warning("Run failed", extra={"error": event.message})

    def _record(self, run: PipelineRun, label: str) -> None:
        self.history.record(HistoryEntry.from_run(run, label))

    # History

    def recall(self, index: int) -> HistoryEntry:
        """Load a history entry back into the session for display.

        Raises:
            IndexError: If there is no entry at ``index``.
        """
        entry = self.history[index]
        self.task = entry.task_description
        self.results = list(entry.results)
        self.total_units = entry.total_units
        self.error = None
        return entry
