"""Sequential pipeline executor.

Runs agent steps strictly in order. Each step receives the task
description framed by the outputs of every step before it, so step N sees
the whole upstream chain rather than just its predecessor. Progress is
reported as a lazy sequence of execution events; the executor keeps no
state between runs.
"""

import threading
import time
from typing import Callable, Iterator, Optional, Protocol, Sequence

from .cancellation import CancellationToken
from .config import config
from .events import (
    ExecutionEvent,
    RunCancelled,
    RunCompleted,
    RunFailed,
    StepCompleted,
    StepStarted,
    is_terminal,
)
from .exceptions import (
    CollaboratorError,
    InvalidRunRequest,
    StepCancelled,
    SwarmError,
    UnknownStepError,
)
from .logging_utils import get_logger
from .models import AgentRequest, AgentResponse, PipelineRun, StepDefinition, StepResult
from .registry import StepRegistry, default_registry


class TaskCollaborator(Protocol):
    """Anything that can execute a single agent request."""

    def send(self, request: AgentRequest) -> AgentResponse:
        ...


def build_context(
    task_description: str,
    prior_results: Sequence[StepResult],
    step: StepDefinition,
    registry: StepRegistry,
) -> str:
    """Build the user message for a step.

    The first step gets the task description verbatim. Later steps get one
    labelled block per prior result, in order, followed by the task restated
    for the current agent.
    """
    if not prior_results:
        return task_description

    blocks = "\n\n".join(
        f"--- {registry.get_step(r.step_id).display_name} Output ---\n{r.content}"
        for r in prior_results
    )
    return (
        f"PRIOR AGENT OUTPUTS:\n{blocks}\n\n---\n\n"
        f"Now, as the {step.display_name}, handle this task:\n{task_description}"
    )


class _PendingCall:
    """A single collaborator call running on a daemon thread."""

    def __init__(self, fn: Callable[[AgentRequest], AgentResponse], request: AgentRequest, name: str):
        self.done = threading.Event()
        self.response: Optional[AgentResponse] = None
        self.error: Optional[Exception] = None
        self._thread = threading.Thread(
            target=self._call, args=(fn, request), name=name, daemon=True
        )

    def start(self) -> None:
        self._thread.start()

    def _call(self, fn, request) -> None:
        try:
            self.response = fn(request)
        except Exception as e:
            self.error = e
        finally:
            self.done.set()


class PipelineExecutor:
    """Runs an ordered list of steps against a task description.

    Attributes:
        collaborator: Executes individual agent requests.
        registry: Resolves step ids to definitions.
        model: Model identifier sent with each request.
        max_output_units: Output token limit sent with each request.
        poll_interval: How often (seconds) an in-flight call checks for
            cancellation.
    """

    def __init__(
        self,
        collaborator: TaskCollaborator,
        registry: Optional[StepRegistry] = None,
        model: Optional[str] = None,
        max_output_units: Optional[int] = None,
        poll_interval: Optional[float] = None,
    ):
        self.logger = get_logger(__name__)
        self.collaborator = collaborator
        self.registry = registry or default_registry()
        self.model = model or config.AGENT_MODEL
        self.max_output_units = max_output_units or config.AGENT_MAX_TOKENS
        self.poll_interval = (
            poll_interval if poll_interval is not None else config.AGENT_CANCEL_POLL_INTERVAL
        )

    def execute(
        self,
        task_description: str,
        steps: Sequence[str],
        cancellation_token: Optional[CancellationToken] = None,
    ) -> Iterator[ExecutionEvent]:
        """Start a run and return its event stream.

        Validation happens immediately; the returned iterator drives the
        actual step calls as it is consumed. Every stream ends with exactly
        one RunCompleted, RunFailed or RunCancelled.

        Raises:
            InvalidRunRequest: If the task description is blank or no steps
                are given. No events are produced in that case.
        """
        if not task_description or not task_description.strip():
            raise InvalidRunRequest("Task description must not be empty")
        if not steps:
            raise InvalidRunRequest("At least one step is required")

        run = PipelineRun(task_description=task_description, steps=list(steps))
        token = cancellation_token or CancellationToken()
        return self._run(run, token)

    def run(
        self,
        task_description: str,
        steps: Sequence[str],
        cancellation_token: Optional[CancellationToken] = None,
    ) -> ExecutionEvent:
        """Execute a pipeline to the end and return its terminal event."""
        last: Optional[ExecutionEvent] = None
        for event in self.execute(task_description, steps, cancellation_token):
            last = event
        if last is None or not is_terminal(last):
            raise SwarmError("Event stream ended without a terminal event")
        return last

    def _run(self, run: PipelineRun, token: CancellationToken) -> Iterator[ExecutionEvent]:
        self.logger.info(
            "Pipeline run started",
            extra={"steps": run.steps, "task": run.task_description[:100]}
        )
        for index, step_id in enumerate(run.steps):
            if token.cancelled:
                yield self._cancelled(run)
                return

            try:
                step = self.registry.get_step(step_id)
            except UnknownStepError as e:
                yield self._failed(run, e)
                return

            yield StepStarted(step_id=step_id, index=index)

            context = build_context(
                run.task_description, run.results, step, self.registry
            )
            started = time.monotonic()
            try:
                response = self._invoke(step, context, token)
            except StepCancelled:
                yield self._cancelled(run)
                return
            except CollaboratorError as e:
                yield self._failed(run, e.for_step(step.id, step.display_name))
                return
            elapsed = time.monotonic() - started

            result = StepResult(
                step_id=step.id,
                content=response.text,
                input_units=response.usage.input_tokens,
                output_units=response.usage.output_tokens,
                elapsed_seconds=round(elapsed, 3),
            )
            run.add_result(result)

            self.logger.info(
                f"{step.display_name} completed",
                extra={
                    "step_id": step.id,
                    "index": index,
                    "input_tokens": result.input_units,
                    "output_tokens": result.output_units,
                    "elapsed_seconds": result.elapsed_seconds,
                }
            )
            yield StepCompleted(result=result, total_units=run.total_units)

        self.logger.info(
            "Pipeline run completed",
            extra={"steps": len(run.results), "total_tokens": run.total_units}
        )
        yield RunCompleted(results=tuple(run.results), total_units=run.total_units)

    def _invoke(
        self,
        step: StepDefinition,
        context: str,
        token: CancellationToken,
    ) -> AgentResponse:
        """Call the collaborator on a daemon thread, abandoning it on cancel.

        An abandoned call keeps running until its own request timeout but
        never holds up interpreter exit, and its outcome is dropped.
        """
        if token.cancelled:
            raise StepCancelled(step.id)

        request = AgentRequest(
            directive=step.instruction_template,
            context=context,
            model=self.model,
            max_output_units=self.max_output_units,
        )
        call = _PendingCall(self.collaborator.send, request, name=f"agent-step-{step.id}")
        call.start()

        while not call.done.wait(self.poll_interval):
            if token.cancelled:
                self.logger.info(
                    f"{step.display_name} abandoned mid-call",
                    extra={"step_id": step.id}
                )
                raise StepCancelled(step.id)

        if call.error is None:
            return call.response
        if isinstance(call.error, CollaboratorError):
            raise call.error
        self.logger.error(
            f"Unexpected error from agent collaborator: {call.error}",
            exc_info=call.error,
        )
        raise CollaboratorError(0, str(call.error) or type(call.error).__name__)

    def _cancelled(self, run: PipelineRun) -> RunCancelled:
        run.cancelled = True
        self.logger.info(
            "Pipeline run cancelled",
            extra={"completed_steps": len(run.results), "total_tokens": run.total_units}
        )
        return RunCancelled(partial_results=tuple(run.results))

    def _failed(self, run: PipelineRun, error) -> RunFailed:
        self.logger.error(
            f"Pipeline run failed: {error}",
            extra={"completed_steps": len(run.results)}
        )
        return RunFailed(error=error, partial_results=tuple(run.results))
