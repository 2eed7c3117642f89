"""
Schema validation for recorded event logs.

This module contains the validation logic that checks raw parsed YAML
against the event log schema and reports errors with helpful messages.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from ..reporting.models import StepStatus
from .models import EventType


# ─────────────────────────────────────────────────────────────────────────────
# Validation Result Types
# ─────────────────────────────────────────────────────────────────────────────

@dataclass
class ValidationError:
    """Represents a single validation error with context."""
    path: str  # e.g., "events[3].result.status"
    message: str
    value: Any = None
    suggestion: str | None = None

    def __str__(self) -> str:
        parts = [f"❌ {self.path}: {self.message}"]
        if self.value is not None:
            parts.append(f"   Got: {repr(self.value)}")
        if self.suggestion:
            parts.append(f"   💡 {self.suggestion}")
        return "\n".join(parts)


@dataclass
class ValidationResult:
    """Result of schema validation."""
    errors: list[ValidationError] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return len(self.errors) == 0

    def add_error(
        self,
        path: str,
        message: str,
        value: Any = None,
        suggestion: str | None = None
    ) -> None:
        self.errors.append(ValidationError(path, message, value, suggestion))

    def __str__(self) -> str:
        if self.is_valid:
            return "✅ Schema validation passed"
        lines = [f"Schema validation failed with {len(self.errors)} error(s):\n"]
        lines.extend(str(e) for e in self.errors)
        return "\n".join(lines)


# ─────────────────────────────────────────────────────────────────────────────
# Schema Validator
# ─────────────────────────────────────────────────────────────────────────────

NODE_FIELDS = {"keyword", "type", "description", "tags", "uri", "line"}
STEP_FIELDS = {"keyword", "tags", "uri", "line", "result", "embeddings"}


class EventLogValidator:
    """Validates raw parsed YAML against the event log schema."""

    REQUIRED_TOP_LEVEL = {"version", "events"}
    OPTIONAL_TOP_LEVEL = {"name"}
    VALID_EVENT_TYPES = {t.value for t in EventType}
    VALID_STATUSES = {s.value for s in StepStatus}

    # event type -> (required fields, optional fields); "event" and "cid" are common
    EVENT_FIELDS: dict[str, tuple[set[str], set[str]]] = {
        EventType.FEATURE_STARTED.value: ({"id", "name"}, NODE_FIELDS),
        EventType.SCENARIO_STARTED.value: ({"parent_id", "id", "name"}, NODE_FIELDS),
        EventType.SCENARIO_FINISHED.value: ({"parent_id", "id"}, set()),
        EventType.STEP_FINISHED.value: ({"parent_id", "id", "name"}, STEP_FIELDS | {"arguments"}),
        EventType.HOOK_FINISHED.value: ({"parent_id", "id", "name"}, STEP_FIELDS),
        EventType.RUN_METADATA.value: (set(), {"browser", "device"}),
    }

    def __init__(self, data: dict[str, Any]):
        self.data = data
        self.result = ValidationResult()

    def validate(self) -> ValidationResult:
        """Run all validation checks and return result."""
        self._validate_top_level()
        if not self.result.is_valid:
            return self.result

        self._validate_version()
        self._validate_name()
        self._validate_events()

        return self.result

    def _validate_top_level(self) -> None:
        """Check required and unknown top-level keys."""
        keys = set(self.data.keys())
        missing = self.REQUIRED_TOP_LEVEL - keys
        unknown = keys - self.REQUIRED_TOP_LEVEL - self.OPTIONAL_TOP_LEVEL

        for key in sorted(missing):
            self.result.add_error(
                key,
                f"Required field '{key}' is missing",
                suggestion=f"Add '{key}:' to your event log"
            )

        for key in sorted(unknown, key=str):
            self.result.add_error(
                str(key),
                f"Unknown top-level field '{key}'",
                suggestion=f"Valid fields are: {', '.join(sorted(self.REQUIRED_TOP_LEVEL | self.OPTIONAL_TOP_LEVEL))}"
            )

    def _validate_version(self) -> None:
        version = self.data.get("version")
        if not isinstance(version, int) or isinstance(version, bool):
            self.result.add_error(
                "version",
                "Must be an integer",
                value=version,
                suggestion="Use 'version: 1'"
            )
        elif version < 1:
            self.result.add_error(
                "version",
                "Must be >= 1",
                value=version
            )

    def _validate_name(self) -> None:
        if "name" not in self.data:
            return
        name = self.data.get("name")
        if not isinstance(name, str):
            self.result.add_error(
                "name",
                "Must be a string",
                value=name
            )

    def _validate_events(self) -> None:
        events = self.data.get("events")
        if not isinstance(events, list):
            self.result.add_error(
                "events",
                "Must be a list",
                value=events
            )
            return

        for i, event in enumerate(events):
            self._validate_event(f"events[{i}]", event)

    def _validate_event(self, path: str, event: Any) -> None:
        if not isinstance(event, dict):
            self.result.add_error(path, "Must be an object", value=event)
            return

        event_type = event.get("event")
        if event_type not in self.VALID_EVENT_TYPES:
            self.result.add_error(
                f"{path}.event",
                "Invalid event type",
                value=event_type,
                suggestion=f"Valid event types: {', '.join(sorted(self.VALID_EVENT_TYPES))}"
            )
            return

        cid = event.get("cid")
        if isinstance(cid, bool) or not isinstance(cid, (str, int)) or str(cid) == "":
            self.result.add_error(
                f"{path}.cid",
                "Required: a non-empty worker context id",
                value=cid,
                suggestion="Use the runner's context id, e.g. 'cid: \"0-0\"'"
            )

        required, optional = self.EVENT_FIELDS[event_type]
        allowed = required | optional | {"event", "cid"}

        for key in sorted(key for key in required if event.get(key) is None):
            self.result.add_error(
                f"{path}.{key}",
                f"Required for '{event_type}' events"
            )

        for key in sorted(set(event) - allowed, key=str):
            self.result.add_error(
                f"{path}.{key}",
                f"Unknown field for '{event_type}' events",
                suggestion=f"Valid fields are: {', '.join(sorted(allowed))}"
            )

        for key in ("id", "parent_id", "name", "keyword", "type", "description",
                    "uri", "browser", "device"):
            if key in event and event[key] is not None and key in allowed:
                self._validate_string(f"{path}.{key}", event[key], allow_empty=key not in {"id", "parent_id"})

        if "line" in event and event["line"] is not None:
            line = event["line"]
            if not isinstance(line, int) or isinstance(line, bool) or line < 0:
                self.result.add_error(
                    f"{path}.line",
                    "Must be a non-negative integer",
                    value=line
                )

        if "tags" in event:
            self._validate_tags(f"{path}.tags", event["tags"])
        if "result" in event and "result" in allowed:
            self._validate_result(f"{path}.result", event["result"])
        if "embeddings" in event and "embeddings" in allowed:
            self._validate_embeddings(f"{path}.embeddings", event["embeddings"])
        if "arguments" in event and "arguments" in allowed:
            if not isinstance(event["arguments"], list):
                self.result.add_error(
                    f"{path}.arguments",
                    "Must be a list",
                    value=event["arguments"]
                )

    def _validate_string(self, path: str, value: Any, allow_empty: bool = True) -> None:
        if not isinstance(value, str):
            self.result.add_error(path, "Must be a string", value=value)
        elif not allow_empty and not value.strip():
            self.result.add_error(path, "Cannot be empty")

    def _validate_tags(self, path: str, tags: Any) -> None:
        if not isinstance(tags, list):
            self.result.add_error(path, "Must be a list of strings", value=tags)
            return
        for i, tag in enumerate(tags):
            if not isinstance(tag, str):
                self.result.add_error(
                    f"{path}[{i}]",
                    "Must be a string",
                    value=tag,
                    suggestion="Quote tags in YAML, e.g. '\"@smoke\"'"
                )

    def _validate_result(self, path: str, result: Any) -> None:
        if not isinstance(result, dict):
            self.result.add_error(path, "Must be an object", value=result)
            return

        status = result.get("status")
        if status not in self.VALID_STATUSES:
            self.result.add_error(
                f"{path}.status",
                "Invalid step status",
                value=status,
                suggestion=f"Valid statuses: {', '.join(sorted(self.VALID_STATUSES))}"
            )

        duration = result.get("duration")
        if duration is not None:
            if not isinstance(duration, int) or isinstance(duration, bool) or duration < 0:
                self.result.add_error(
                    f"{path}.duration",
                    "Must be a non-negative integer (nanoseconds)",
                    value=duration
                )

        error_message = result.get("error_message")
        if error_message is not None and not isinstance(error_message, str):
            self.result.add_error(
                f"{path}.error_message",
                "Must be a string",
                value=error_message
            )

        unknown = set(result) - {"status", "duration", "error_message"}
        for key in sorted(unknown, key=str):
            self.result.add_error(
                f"{path}.{key}",
                "Unknown result field",
                suggestion="Valid fields are: duration, error_message, status"
            )

    def _validate_embeddings(self, path: str, embeddings: Any) -> None:
        if not isinstance(embeddings, list):
            self.result.add_error(path, "Must be a list", value=embeddings)
            return

        for i, embedding in enumerate(embeddings):
            item_path = f"{path}[{i}]"
            if not isinstance(embedding, dict):
                self.result.add_error(item_path, "Must be an object", value=embedding)
                continue
            if not isinstance(embedding.get("data"), (str, bytes)):
                self.result.add_error(
                    f"{item_path}.data",
                    "Required: string or binary payload",
                    value=embedding.get("data")
                )
            mime_type = embedding.get("mime_type")
            if not isinstance(mime_type, str) or not mime_type:
                self.result.add_error(
                    f"{item_path}.mime_type",
                    "Required: media type string",
                    value=mime_type,
                    suggestion="e.g. 'mime_type: image/png'"
                )
