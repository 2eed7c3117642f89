"""Tests for event log validation, parsing and loading."""
from __future__ import annotations

from pathlib import Path

from verdict.events import (
    EventLogValidator,
    FeatureStarted,
    HookFinished,
    RunMetadata,
    ScenarioFinished,
    ScenarioStarted,
    StepFinished,
    load_event_log,
    validate_event_log_yaml,
)
from verdict.reporting import StepStatus


def _errors(data: dict) -> dict[str, str]:
    result = EventLogValidator(data).validate()
    return {error.path: error.message for error in result.errors}


# ============================================================================
# Validation
# ============================================================================


class TestEventLogValidator:
    """Tests for schema validation of raw event logs."""

    def test_minimal_log_is_valid(self) -> None:
        assert _errors({"version": 1, "events": []}) == {}

    def test_missing_and_unknown_top_level(self) -> None:
        errors = _errors({"steps": []})
        assert "version" in errors
        assert "events" in errors
        assert errors["steps"] == "Unknown top-level field 'steps'"

    def test_bad_version(self) -> None:
        assert _errors({"version": "1", "events": []}) == {"version": "Must be an integer"}
        assert _errors({"version": 0, "events": []}) == {"version": "Must be >= 1"}

    def test_events_must_be_list(self) -> None:
        assert _errors({"version": 1, "events": {}}) == {"events": "Must be a list"}

    def test_unknown_event_type(self) -> None:
        errors = _errors({"version": 1, "events": [{"event": "suite_started", "cid": "0"}]})
        assert errors == {"events[0].event": "Invalid event type"}

    def test_missing_cid(self) -> None:
        errors = _errors({"version": 1, "events": [{"event": "run_metadata"}]})
        assert "events[0].cid" in errors

    def test_integer_cid_is_accepted(self) -> None:
        assert _errors({"version": 1, "events": [{"event": "run_metadata", "cid": 3}]}) == {}

    def test_required_fields_per_event(self) -> None:
        errors = _errors({"version": 1, "events": [
            {"event": "step_finished", "cid": "0", "id": "s"},
        ]})
        assert errors["events[0].parent_id"] == "Required for 'step_finished' events"
        assert errors["events[0].name"] == "Required for 'step_finished' events"

    def test_null_required_field_is_missing(self) -> None:
        errors = _errors({"version": 1, "events": [
            {"event": "scenario_started", "cid": "0", "parent_id": "f", "id": "s",
             "name": None},
        ]})
        assert errors == {"events[0].name": "Required for 'scenario_started' events"}

    def test_field_not_allowed_for_event(self) -> None:
        errors = _errors({"version": 1, "events": [
            {"event": "hook_finished", "cid": "0", "parent_id": "s", "id": "h",
             "name": "x", "arguments": ["a"]},
        ]})
        assert errors == {"events[0].arguments": "Unknown field for 'hook_finished' events"}

    def test_empty_id(self) -> None:
        errors = _errors({"version": 1, "events": [
            {"event": "feature_started", "cid": "0", "id": " ", "name": "x"},
        ]})
        assert errors == {"events[0].id": "Cannot be empty"}

    def test_bad_line_and_tags(self) -> None:
        errors = _errors({"version": 1, "events": [
            {"event": "feature_started", "cid": "0", "id": "f", "name": "x",
             "line": -1, "tags": ["@ok", 5]},
        ]})
        assert errors == {
            "events[0].line": "Must be a non-negative integer",
            "events[0].tags[1]": "Must be a string",
        }

    def test_bad_result(self) -> None:
        errors = _errors({"version": 1, "events": [
            {"event": "step_finished", "cid": "0", "parent_id": "s", "id": "a", "name": "x",
             "result": {"status": "green", "duration": -5, "extra": 1}},
        ]})
        assert errors == {
            "events[0].result.status": "Invalid step status",
            "events[0].result.duration": "Must be a non-negative integer (nanoseconds)",
            "events[0].result.extra": "Unknown result field",
        }

    def test_bad_embeddings(self) -> None:
        errors = _errors({"version": 1, "events": [
            {"event": "step_finished", "cid": "0", "parent_id": "s", "id": "a", "name": "x",
             "embeddings": [{"data": 1}, "nope"]},
        ]})
        assert errors == {
            "events[0].embeddings[0].data": "Required: string or binary payload",
            "events[0].embeddings[0].mime_type": "Required: media type string",
            "events[0].embeddings[1]": "Must be an object",
        }

    def test_result_string_lists_errors(self) -> None:
        _, result = validate_event_log_yaml("version: 1\nevents: 3\n")
        text = str(result)
        assert "failed with 1 error(s)" in text
        assert "events: Must be a list" in text


# ============================================================================
# Parsing
# ============================================================================


class TestParsing:
    """Tests for conversion to typed events."""

    def test_sample_log(self, sample_log_path: Path) -> None:
        event_log, result = load_event_log(sample_log_path)
        assert result.is_valid, str(result)
        assert event_log.version == 1
        assert event_log.name == "Nightly smoke"
        assert event_log.context_ids() == ["0-0", "0-1"]
        assert [type(e) for e in event_log.events[:6]] == [
            FeatureStarted,
            ScenarioStarted,
            HookFinished,
            StepFinished,
            StepFinished,
            ScenarioFinished,
        ]
        assert isinstance(event_log.events[-1], RunMetadata)

    def test_defaults(self) -> None:
        event_log, result = validate_event_log_yaml("""
version: 1
events:
  - {event: feature_started, cid: 7, id: f, name: F}
  - {event: scenario_started, cid: 7, parent_id: f, id: s, name: S}
  - {event: step_finished, cid: 7, parent_id: s, id: a, name: A}
""")
        assert result.is_valid, str(result)
        feature, scenario, step = event_log.events
        assert feature.cid == "7"
        assert feature.keyword == "Feature"
        assert feature.type == "feature"
        assert feature.tags == []
        assert scenario.keyword == "Scenario"
        assert step.result.status == StepStatus.PASSED
        assert step.embeddings == []
        assert step.arguments == []

    def test_step_fields(self, sample_log_path: Path) -> None:
        event_log, _ = load_event_log(sample_log_path)
        step = event_log.events[4]
        assert step.result.status == StepStatus.FAILED
        assert step.result.error_message == "dashboard not visible"
        assert step.embeddings[0].mime_type == "image/png"
        assert event_log.events[3].arguments == ["admin"]
        assert event_log.events[3].result.duration == 1200

    def test_binary_embedding(self) -> None:
        event_log, result = validate_event_log_yaml("""
version: 1
events:
  - event: hook_finished
    cid: "0"
    parent_id: s
    id: h
    name: screenshot
    embeddings:
      - data: !!binary aGVsbG8=
        mime_type: image/png
""")
        assert result.is_valid, str(result)
        assert event_log.events[0].embeddings[0].data == b"hello"


# ============================================================================
# Loading
# ============================================================================


class TestLoader:
    """Tests for file and string loading."""

    def test_missing_file(self, tmp_path: Path) -> None:
        event_log, result = load_event_log(tmp_path / "nope.yaml")
        assert event_log is None
        assert result.errors[0].message == "File not found"

    def test_invalid_yaml(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.yaml"
        path.write_text("version: [1\n")
        event_log, result = load_event_log(path)
        assert event_log is None
        assert result.errors[0].message.startswith("Invalid YAML syntax")

    def test_non_mapping(self) -> None:
        event_log, result = validate_event_log_yaml("- 1\n- 2\n")
        assert event_log is None
        assert result.errors[0].value == "list"

    def test_invalid_schema_returns_none(self) -> None:
        event_log, result = validate_event_log_yaml("version: 1\n")
        assert event_log is None
        assert not result.is_valid
