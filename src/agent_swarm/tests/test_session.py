# src/agent_swarm/tests/test_session.py
"""
Unit tests for the swarm session.

Tests cover:
- Preset selection and custom step toggling
- Run state tracking while events are consumed
- History recording rules for completed, cancelled and failed runs
- Stop requests and concurrent-run protection
- Recalling history entries
"""
from unittest.mock import MagicMock

import pytest

from agent_swarm.events import RunCancelled, RunCompleted, RunFailed, StepCompleted, StepStarted
from agent_swarm.exceptions import (
    CollaboratorError,
    InvalidRunRequest,
    UnknownPresetError,
    UnknownStepError,
)
from agent_swarm.executor import PipelineExecutor
from agent_swarm.history import RunHistory
from agent_swarm.session import SwarmSession

TASK = "Add a password reset flow"


@pytest.fixture
def session(executor):
    return SwarmSession(executor, history=RunHistory(limit=20), preset="quick-build")


class TestPipelineSelection:
    """Tests for choosing what to run."""

    @pytest.mark.unit
    def test_default_preset_is_full_feature(self, executor):
        session = SwarmSession(executor)
        assert session.pipeline_label == "Full Feature Build"
        assert session.active_steps == ["scout", "analyst", "builder", "reviewer", "merger"]

    @pytest.mark.unit
    def test_select_preset(self, session):
        session.select_preset("plan-only")
        assert session.active_steps == ["coordinator", "scout", "analyst"]
        assert session.pipeline_label == "Plan Only"

    @pytest.mark.unit
    def test_select_unknown_preset(self, session):
        with pytest.raises(UnknownPresetError):
            session.select_preset("nope")

    @pytest.mark.unit
    def test_toggle_switches_to_custom(self, session):
        for step_id in ["analyst", "builder", "reviewer"]:
            session.toggle_step(step_id)

        assert session.pipeline_label == "Custom"
        assert session.active_steps == ["analyst", "builder", "reviewer"]
        assert session.toggle_step("builder") == ["analyst", "reviewer"]
        assert session.toggle_step("builder") == ["analyst", "reviewer", "builder"]

    @pytest.mark.unit
    def test_custom_steps_survive_preset_switch(self, session):
        session.toggle_step("scout")
        session.select_preset("quick-build")
        session.select_custom()
        assert session.active_steps == ["scout"]

    @pytest.mark.unit
    def test_toggle_unknown_step(self, session):
        with pytest.raises(UnknownStepError):
            session.toggle_step("designer")


class TestSessionRun:
    """Tests for running through a session."""

    @pytest.mark.unit
    def test_completed_run_updates_state_and_history(self, session):
        events = list(session.run(TASK))

        assert isinstance(events[-1], RunCompleted)
        assert [r.step_id for r in session.results] == ["analyst", "builder", "reviewer"]
        assert session.total_units == 660
        assert session.is_running is False
        assert session.current_step is None
        assert session.error is None

        entry = session.history.latest()
        assert entry.task_description == TASK
        assert entry.pipeline_label == "Quick Build"
        assert entry.total_units == 660
        assert len(entry.results) == 3

    @pytest.mark.unit
    def test_state_tracks_progress(self, session):
        for event in session.run(TASK):
            assert session.is_running is True
            if isinstance(event, StepStarted):
                assert session.current_step == event.step_id
            elif isinstance(event, StepCompleted):
                assert session.results[-1] == event.result
                assert session.total_units == event.total_units

    @pytest.mark.unit
    def test_failed_run_sets_error_and_skips_history(self, registry, response_factory):
        collaborator = MagicMock()
        collaborator.send.side_effect = [response_factory(), CollaboratorError(429, "Rate limited")]
        executor = PipelineExecutor(collaborator, registry=registry, poll_interval=0.01)
        session = SwarmSession(executor, preset="quick-build")

        events = list(session.run(TASK))

        assert isinstance(events[-1], RunFailed)
        assert session.error == "Builder failed (429): Rate limited"
        assert len(session.results) == 1
        assert len(session.history) == 0
        assert session.is_running is False

    @pytest.mark.unit
    def test_stop_between_steps_records_partial_run(self, session):
        events = []
        for event in session.run(TASK):
            events.append(event)
            if isinstance(event, StepCompleted):
                session.stop()
                session.stop()

        assert isinstance(events[-1], RunCancelled)
        assert len(session.results) == 1
        assert session.error is None
        entry = session.history.latest()
        assert entry is not None
        assert len(entry.results) == 1

    @pytest.mark.unit
    def test_stop_before_first_result_records_nothing(self, session):
        events = []
        for event in session.run(TASK):
            events.append(event)
            if isinstance(event, StepStarted):
                session.stop()

        assert isinstance(events[-1], RunCancelled)
        assert len(session.history) == 0

    @pytest.mark.unit
    def test_second_run_while_active_rejected(self, session):
        events = session.run(TASK)
        next(events)

        with pytest.raises(InvalidRunRequest):
            session.run(TASK)

        list(events)
        assert session.is_running is False

    @pytest.mark.unit
    def test_unconsumed_stream_leaves_session_idle(self, session, collaborator):
        session.run("task one")

        assert session.is_running is False
        events = list(session.run("task two"))

        assert isinstance(events[-1], RunCompleted)
        assert session.history.latest().task_description == "task two"
        assert collaborator.send.call_count == 3

    @pytest.mark.unit
    def test_second_stream_rejected_once_first_is_consumed(self, session):
        first = session.run("task one")
        second = session.run("task two")
        next(first)

        with pytest.raises(InvalidRunRequest):
            next(second)

        assert isinstance(list(first)[-1], RunCompleted)
        assert session.is_running is False
        assert session.task == "task one"

    @pytest.mark.unit
    def test_label_fixed_when_run_requested(self, session):
        events = session.run(TASK)
        session.select_preset("plan-only")
        list(events)

        assert session.history.latest().pipeline_label == "Quick Build"

    @pytest.mark.unit
    def test_empty_custom_pipeline_rejected(self, session):
        session.select_custom()
        with pytest.raises(InvalidRunRequest):
            session.run(TASK)
        assert session.is_running is False

    @pytest.mark.unit
    def test_blank_task_rejected(self, session):
        with pytest.raises(InvalidRunRequest):
            session.run("  ")

    @pytest.mark.unit
    def test_stop_without_run_is_noop(self, session):
        session.stop()
        assert session.is_running is False


class TestRecall:
    """Tests for recalling past runs."""

    @pytest.mark.unit
    def test_recall_restores_results(self, session):
        list(session.run("first task"))
        session.select_preset("research-first")
        list(session.run("second task"))

        entry = session.recall(1)

        assert entry.task_description == "first task"
        assert session.task == "first task"
        assert [r.step_id for r in session.results] == ["analyst", "builder", "reviewer"]

    @pytest.mark.unit
    def test_recall_out_of_range(self, session):
        with pytest.raises(IndexError):
            session.recall(0)
