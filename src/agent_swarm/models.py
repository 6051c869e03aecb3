"""Pydantic models for agent swarm data structures."""

from datetime import datetime, timezone
from typing import List, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class StepDefinition(BaseModel):
    """A named agent step backed by a fixed system prompt."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Unique step key, e.g. 'builder'")
    display_name: str = Field(..., description="Human-readable agent name")
    instruction_template: str = Field(
        ..., description="Fixed directive sent as the system prompt"
    )
    role: str = Field(default="", description="One-line summary of the agent's role")
    icon: str = Field(default="", description="Display icon")
    color: str = Field(default="", description="Display colour (hex)")


class PipelinePreset(BaseModel):
    """A named, fixed ordering of steps."""

    model_config = ConfigDict(frozen=True)

    key: str = Field(..., description="Preset lookup key, e.g. 'quick-build'")
    name: str = Field(..., description="Display name, e.g. 'Quick Build'")
    description: str = Field(default="", description="Short description of the chain")
    steps: Tuple[str, ...] = Field(..., description="Ordered step ids")

    @field_validator("steps")
    @classmethod
    def validate_steps(cls, v: Tuple[str, ...]) -> Tuple[str, ...]:
        """Presets must name at least one step."""
        if not v:
            raise ValueError("A preset must contain at least one step")
        return v

    @property
    def label(self) -> str:
        return self.name

    @property
    def is_custom(self) -> bool:
        return False


class CustomPipeline(BaseModel):
    """A user-assembled pipeline where each step id is present at most once."""

    steps: List[str] = Field(default_factory=list, description="Ordered step ids")

    @field_validator("steps")
    @classmethod
    def dedupe_steps(cls, v: List[str]) -> List[str]:
        """Keep the first occurrence of each id."""
        seen = set()
        ordered = []
        for step_id in v:
            if step_id not in seen:
                seen.add(step_id)
                ordered.append(step_id)
        return ordered

    @property
    def label(self) -> str:
        return "Custom"

    @property
    def is_custom(self) -> bool:
        return True

    def toggle(self, step_id: str) -> List[str]:
        """Remove ``step_id`` if present, otherwise append it.

        Returns:
            The updated step list.
        """
        if step_id in self.steps:
            self.steps = [s for s in self.steps if s != step_id]
        else:
            self.steps = self.steps + [step_id]
        return list(self.steps)

    def clear(self) -> None:
        self.steps = []


PipelineDefinition = Union[PipelinePreset, CustomPipeline]


class StepResult(BaseModel):
    """The output of one completed step."""

    model_config = ConfigDict(frozen=True)

    step_id: str = Field(..., description="Id of the step that produced this result")
    content: str = Field(default="", description="Concatenated text output")
    input_units: int = Field(default=0, ge=0, description="Input tokens consumed")
    output_units: int = Field(default=0, ge=0, description="Output tokens produced")
    elapsed_seconds: float = Field(default=0.0, ge=0.0, description="Call duration")
    completed_at: datetime = Field(
        default_factory=_utcnow, description="When the step finished"
    )

    @property
    def total_units(self) -> int:
        return self.input_units + self.output_units


class PipelineRun(BaseModel):
    """In-progress state of one pipeline execution."""

    task_description: str = Field(..., description="Task the pipeline is working on")
    steps: List[str] = Field(..., description="Ordered step ids being executed")
    results: List[StepResult] = Field(default_factory=list)
    total_units: int = Field(default=0, description="Running sum of usage units")
    cancelled: bool = Field(default=False)

    def add_result(self, result: StepResult) -> None:
        """Append a completed step and keep the running unit total in sync."""
        self.results.append(result)
        self.total_units += result.total_units

    @property
    def completed_count(self) -> int:
        return len(self.results)


class HistoryEntry(BaseModel):
    """A finished run kept for recall."""

    model_config = ConfigDict(frozen=True)

    task_description: str
    pipeline_label: str
    results: Tuple[StepResult, ...] = Field(default_factory=tuple)
    total_units: int = 0
    timestamp: datetime = Field(default_factory=_utcnow)

    @classmethod
    def from_run(cls, run: PipelineRun, pipeline_label: str) -> "HistoryEntry":
        return cls(
            task_description=run.task_description,
            pipeline_label=pipeline_label,
            results=tuple(run.results),
            total_units=run.total_units,
        )

    def summary(self, width: int = 60) -> str:
        """One-line description suitable for a history listing."""
        task = self.task_description
        if len(task) > width:
            task = task[:width] + "..."
        return (
            f"{task} | {self.pipeline_label} | {len(self.results)} steps | "
            f"{self.total_units:,} tokens"
        )


class QuickTask(BaseModel):
    """A canned task description offered as a shortcut."""

    model_config = ConfigDict(frozen=True)

    label: str
    task: str


# Agent endpoint wire models


class AgentRequest(BaseModel):
    """Input to the task-execution collaborator."""

    directive: str = Field(..., description="Fixed per-step instruction")
    context: str = Field(..., description="Built context message")
    model: str = Field(..., description="Model identifier")
    max_output_units: int = Field(..., gt=0, description="Output token limit")

    def to_payload(self) -> dict:
        """Messages API request body."""
        return {
            "model": self.model,
            "max_tokens": self.max_output_units,
            "system": self.directive,
            "messages": [{"role": "user", "content": self.context}],
        }


class ContentBlock(BaseModel):
    type: str = "text"
    text: Optional[str] = None


class Usage(BaseModel):
    input_tokens: int = Field(default=0, ge=0)
    output_tokens: int = Field(default=0, ge=0)

    @field_validator("input_tokens", "output_tokens", mode="before")
    @classmethod
    def default_missing(cls, v):
        return 0 if v is None else v


class AgentResponse(BaseModel):
    """Successful agent endpoint payload.

    Missing ``content`` or ``usage`` fall back to empty values; anything
    present must have the right shape.
    """

    content: List[ContentBlock] = Field(default_factory=list)
    usage: Usage = Field(default_factory=Usage)

    @field_validator("content", mode="before")
    @classmethod
    def default_content(cls, v):
        return [] if v is None else v

    @field_validator("usage", mode="before")
    @classmethod
    def default_usage(cls, v):
        return {} if v is None else v

    @property
    def text(self) -> str:
        return "".join(block.text or "" for block in self.content)

    @property
    def content_fragments(self) -> List[str]:
        return [block.text or "" for block in self.content]
