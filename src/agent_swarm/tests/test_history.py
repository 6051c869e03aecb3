# src/agent_swarm/tests/test_history.py
"""Unit tests for the bounded run history."""
import pytest

from agent_swarm.history import RunHistory
from agent_swarm.models import HistoryEntry


def _entry(n: int) -> HistoryEntry:
    return HistoryEntry(task_description=f"task {n}", pipeline_label="Quick Build", total_units=n)


class TestRunHistory:
    """Tests for RunHistory."""

    @pytest.mark.unit
    def test_empty_history(self):
        history = RunHistory(limit=20)
        assert history.list() == []
        assert history.latest() is None
        assert len(history) == 0

    @pytest.mark.unit
    def test_most_recent_first(self):
        history = RunHistory(limit=20)
        for n in range(3):
            history.record(_entry(n))

        assert [e.task_description for e in history.list()] == ["task 2", "task 1", "task 0"]
        assert history.latest().task_description == "task 2"

    @pytest.mark.unit
    def test_twenty_first_entry_evicts_oldest(self):
        history = RunHistory(limit=20)
        for n in range(21):
            history.record(_entry(n))

        entries = history.list()
        assert len(entries) == 20
        assert entries[0].task_description == "task 20"
        assert entries[-1].task_description == "task 1"
        assert "task 0" not in [e.task_description for e in entries]

    @pytest.mark.unit
    def test_never_exceeds_limit(self):
        history = RunHistory(limit=20)
        for n in range(50):
            history.record(_entry(n))
            assert len(history) <= 20

    @pytest.mark.unit
    def test_list_returns_a_copy(self):
        history = RunHistory(limit=20)
        history.record(_entry(1))
        history.list().clear()
        assert len(history) == 1

    @pytest.mark.unit
    def test_default_limit_from_config(self):
        assert RunHistory().limit == 20

    @pytest.mark.unit
    def test_invalid_limit(self):
        with pytest.raises(ValueError):
            RunHistory(limit=0)

    @pytest.mark.unit
    def test_index_access(self):
        history = RunHistory(limit=5)
        history.record(_entry(1))
        history.record(_entry(2))
        assert history[1].task_description == "task 1"
