"""Tests for replaying recorded events through a builder."""
from __future__ import annotations

from pathlib import Path

import pytest

from verdict.events import (
    FeatureStarted,
    ScenarioFinished,
    ScenarioStarted,
    StepFinished,
    load_event_log,
)
from verdict.replay import dispatch, replay_events
from verdict.reporting import ParentNotFoundError, ReportBuilder


class TestDispatch:

    def test_scenario_finished_flattens_title(self, login_builder: ReportBuilder) -> None:
        dispatch(login_builder, StepFinished(
            cid="c1", parent_id="S1", id="St1", name="x", arguments=["admin"],
        ))
        dispatch(login_builder, ScenarioFinished(cid="c1", parent_id="F1", id="S1"))
        assert login_builder.snapshot("c1").features[0].elements[0].name == "Valid login (admin)"

    def test_step_after_scenario_finished_flattens_once(self, login_builder: ReportBuilder) -> None:
        events = [
            StepFinished(cid="c1", parent_id="S1", id="St1", name="enter creds", arguments=["admin"]),
            ScenarioFinished(cid="c1", parent_id="F1", id="S1"),
            StepFinished(cid="c1", parent_id="S1", id="St1", name="enter creds v2", arguments=["admin"]),
        ]
        replay_events(login_builder, events)
        scenario = login_builder.snapshot("c1").features[0].elements[0]
        assert scenario.name == "Valid login (admin)"
        assert [s.name for s in scenario.steps] == ["enter creds v2"]

    def test_unknown_event_type(self, builder: ReportBuilder) -> None:
        with pytest.raises(ValueError):
            dispatch(builder, object())


class TestReplayEvents:

    def test_sample_log(self, sample_log_path: Path) -> None:
        event_log, _ = load_event_log(sample_log_path)
        builder = ReportBuilder()

        result = replay_events(builder, event_log.events)

        assert result.is_clean
        assert result.applied == len(event_log.events)
        assert result.context_ids == ["0-0", "0-1"]

        login = builder.to_dict("0-0")["features"]
        assert len(login) == 1
        scenario = login[0]["elements"][0]
        assert scenario["name"] == "Valid login (admin)"
        assert "arguments" not in scenario
        assert [s["id"] for s in scenario["steps"]] == ["before-1", "step-1", "step-2"]
        assert scenario["steps"][0]["hidden"] is True
        assert scenario["steps"][2]["result"] == {
            "status": "failed",
            "error_message": "dashboard not visible",
        }

        search = builder.to_dict("0-1")["features"]
        assert [f["id"] for f in search] == ["search"]
        assert search[0]["elements"][0]["name"] == "Search by title (Dune, Emma)"
        assert search[0]["metadata"]["browser"] == {"name": "firefox", "version": "Firefox"}

    def test_strict_mode_raises(self, builder: ReportBuilder) -> None:
        events = [
            FeatureStarted(cid="c1", id="F1", name="Login"),
            ScenarioStarted(cid="c1", parent_id="F9", id="S1", name="orphan"),
        ]
        with pytest.raises(ParentNotFoundError):
            replay_events(builder, events)

    def test_lenient_mode_skips(self, builder: ReportBuilder) -> None:
        events = [
            FeatureStarted(cid="c1", id="F1", name="Login"),
            ScenarioStarted(cid="c1", parent_id="F1", id="S1", name="ok"),
            StepFinished(cid="c1", parent_id="S9", id="St1", name="orphan"),
            StepFinished(cid="c1", parent_id="S1", id="St2", name="kept"),
        ]
        result = replay_events(builder, events, strict=False)
        assert result.applied == 3
        assert len(result.skipped) == 1
        assert result.skipped[0].index == 2
        assert result.skipped[0].error.parent_id == "S9"
        steps = builder.snapshot("c1").features[0].elements[0].steps
        assert [s.id for s in steps] == ["St2"]

    def test_empty_features_are_pruned(self, builder: ReportBuilder) -> None:
        events = [
            FeatureStarted(cid="c1", id="F1", name="Skipped"),
            FeatureStarted(cid="c1", id="F2", name="Ran"),
            ScenarioStarted(cid="c1", parent_id="F2", id="S1", name="s"),
        ]
        replay_events(builder, events)
        assert [f.id for f in builder.snapshot("c1").features] == ["F2"]
