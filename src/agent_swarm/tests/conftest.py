"""Shared fixtures for agent swarm tests."""
from unittest.mock import MagicMock

import pytest

from agent_swarm.executor import PipelineExecutor
from agent_swarm.models import AgentResponse
from agent_swarm.registry import default_registry


def make_response(text: str = "ok", input_tokens: int = 10, output_tokens: int = 20) -> AgentResponse:
    """Build a successful agent response with a single text block."""
    return AgentResponse.model_validate(
        {
            "content": [{"type": "text", "text": text}],
            "usage": {"input_tokens": input_tokens, "output_tokens": output_tokens},
        }
    )


@pytest.fixture
def response_factory():
    return make_response


@pytest.fixture
def registry():
    return default_registry()


@pytest.fixture
def collaborator():
    """A mock collaborator answering every call with a distinct response."""
    client = MagicMock()
    counter = {"n": 0}

    def _send(request):
        counter["n"] += 1
        n = counter["n"]
        return make_response(f"output {n}", input_tokens=100 * n, output_tokens=10 * n)

    client.send.side_effect = _send
    return client


@pytest.fixture
def executor(collaborator, registry):
    return PipelineExecutor(
        collaborator,
        registry=registry,
        model="test-model",
        max_output_units=1234,
        poll_interval=0.01,
    )
