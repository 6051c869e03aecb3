"""Exception types for the agent swarm runner."""

from typing import Optional


class SwarmError(Exception):
    """Base exception for agent swarm errors."""

    pass


class InvalidRunRequest(SwarmError):
    """Raised when a run is requested with an empty task or no steps."""

    pass


class UnknownStepError(SwarmError):
    """Raised when a step id is not present in the registry."""

    def __init__(self, step_id: str):
        super().__init__(f"Unknown step: {step_id!r}")
        self.step_id = step_id


class UnknownPresetError(SwarmError):
    """Raised when a preset name is not present in the registry."""

    def __init__(self, name: str):
        super().__init__(f"Unknown pipeline preset: {name!r}")
        self.name = name


class CollaboratorError(SwarmError):
    """Raised when the agent endpoint returns a failure.

    ``status_code`` is the upstream HTTP status, or 0 when the request never
    produced a response (connection error, timeout).
    """

    def __init__(
        self,
        status_code: int,
        message: str,
        step_id: Optional[str] = None,
        step_name: Optional[str] = None,
    ):
        self.status_code = status_code
        self.message = message
        self.step_id = step_id
        self.step_name = step_name
        super().__init__(self._format())

    def _format(self) -> str:
        if self.step_name:
            return f"{self.step_name} failed ({self.status_code}): {self.message}"
        return f"Agent request failed ({self.status_code}): {self.message}"

    def for_step(self, step_id: str, step_name: str) -> "CollaboratorError":
        """Return a copy attributed to the step that made the call."""
        return CollaboratorError(
            status_code=self.status_code,
            message=self.message,
            step_id=step_id,
            step_name=step_name,
        )


class StepCancelled(Exception):
    """Internal signal that a step was abandoned because the run was cancelled.

    Not a SwarmError: cancellation is never a failure. The executor turns it
    into a RunCancelled event and it never reaches callers.
    """

    pass
