"""Agent Swarm - sequential multi-agent pipeline runner."""

from .cancellation import CancellationToken
from .events import (
    ExecutionEvent,
    RunCancelled,
    RunCompleted,
    RunFailed,
    StepCompleted,
    StepStarted,
)
from .exceptions import (
    CollaboratorError,
    InvalidRunRequest,
    SwarmError,
    UnknownPresetError,
    UnknownStepError,
)
from .executor import PipelineExecutor, build_context
from .history import RunHistory
from .models import (
    CustomPipeline,
    HistoryEntry,
    PipelinePreset,
    StepDefinition,
    StepResult,
)
from .registry import StepRegistry, default_registry
from .session import SwarmSession

__version__ = "0.1.0"

__all__ = [
    "CancellationToken",
    "CollaboratorError",
    "CustomPipeline",
    "ExecutionEvent",
    "HistoryEntry",
    "InvalidRunRequest",
    "PipelineExecutor",
    "PipelinePreset",
    "RunCancelled",
    "RunCompleted",
    "RunFailed",
    "RunHistory",
    "StepCompleted",
    "StepDefinition",
    "StepRegistry",
    "StepResult",
    "StepStarted",
    "SwarmError",
    "SwarmSession",
    "UnknownPresetError",
    "UnknownStepError",
    "build_context",
    "default_registry",
]
