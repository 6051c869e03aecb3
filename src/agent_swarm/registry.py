"""Step and preset registry.

The registry holds the closed set of agent step definitions and named
pipeline presets. It is seeded once at startup and read-only afterwards.
"""

from typing import Dict, Iterable, List, Optional

from .exceptions import UnknownPresetError, UnknownStepError
from .models import PipelinePreset, StepDefinition


class StepRegistry:
    """Read-only lookup of step definitions and pipeline presets.

    Args:
        steps: Step definitions to register; ids must be unique.
        presets: Presets to register; every preset step must be a known id.

    Raises:
        ValueError: On duplicate ids or presets that reference unknown steps.
    """

    def __init__(
        self,
        steps: Iterable[StepDefinition],
        presets: Optional[Iterable[PipelinePreset]] = None,
    ):
        self._steps: Dict[str, StepDefinition] = {}
        for step in steps:
            if step.id in self._steps:
                raise ValueError(f"Duplicate step id: {step.id}")
            self._steps[step.id] = step

        self._presets: Dict[str, PipelinePreset] = {}
        for preset in presets or ():
            if preset.key in self._presets:
                raise ValueError(f"Duplicate preset key: {preset.key}")
            unknown = [s for s in preset.steps if s not in self._steps]
            if unknown:
                raise ValueError(
                    f"Preset {preset.key} references unknown steps: {', '.join(unknown)}"
                )
            self._presets[preset.key] = preset

    def get_step(self, step_id: str) -> StepDefinition:
        """Get a step definition by id.

        Raises:
            UnknownStepError: If the id is not registered.
        """
        try:
            return self._steps[step_id]
        except KeyError:
            raise UnknownStepError(step_id) from None

    def get_preset(self, name: str) -> PipelinePreset:
        """Get a preset by key.

        Raises:
            UnknownPresetError: If the key is not registered.
        """
        try:
            return self._presets[name]
        except KeyError:
            raise UnknownPresetError(name) from None

    def has_step(self, step_id: str) -> bool:
        return step_id in self._steps

    def list_steps(self) -> List[StepDefinition]:
        """All step definitions in registration order."""
        return list(self._steps.values())

    def list_presets(self) -> List[PipelinePreset]:
        """All presets in registration order."""
        return list(self._presets.values())

    def display_chain(self, step_ids: Iterable[str]) -> str:
        """Render step ids as 'Scout -> Analyst -> ...' using display names."""
        return " -> ".join(self.get_step(s).display_name for s in step_ids)


_default_registry: Optional[StepRegistry] = None


def default_registry() -> StepRegistry:
    """Get the registry seeded with the built-in agents and presets."""
    global _default_registry
    if _default_registry is None:
        from .agents import AGENTS, PIPELINE_PRESETS

        _default_registry = StepRegistry(AGENTS, PIPELINE_PRESETS)
    return _default_registry
