"""
Event log parser.

This module converts validated YAML data into typed event structures.
"""

from __future__ import annotations

from typing import Any

from ..reporting.models import StepResult, StepStatus
from .models import (
    EmbeddingPayload,
    Event,
    EventLog,
    EventType,
    FeatureStarted,
    HookFinished,
    RunMetadata,
    ScenarioFinished,
    ScenarioStarted,
    StepFinished,
)


class EventLogParser:
    """Parses and converts validated YAML to typed events."""

    def __init__(self, data: dict[str, Any]):
        self.data = data

    def parse(self) -> EventLog:
        """Convert validated data to a typed EventLog."""
        return EventLog(
            version=self.data["version"],
            name=self.data.get("name", ""),
            events=[self.parse_event(event) for event in self.data.get("events", [])],
        )

    def parse_event(self, event: dict[str, Any]) -> Event:
        event_type = EventType(event["event"])
        cid = str(event["cid"])

        if event_type == EventType.FEATURE_STARTED:
            return FeatureStarted(
                cid=cid,
                id=event["id"],
                name=event["name"],
                keyword=event.get("keyword", "Feature"),
                type=event.get("type", "feature"),
                description=event.get("description", ""),
                tags=event.get("tags", []),
                uri=event.get("uri"),
                line=event.get("line"),
            )
        elif event_type == EventType.SCENARIO_STARTED:
            return ScenarioStarted(
                cid=cid,
                parent_id=event["parent_id"],
                id=event["id"],
                name=event["name"],
                keyword=event.get("keyword", "Scenario"),
                type=event.get("type", "scenario"),
                description=event.get("description", ""),
                tags=event.get("tags", []),
                uri=event.get("uri"),
                line=event.get("line"),
            )
        elif event_type == EventType.SCENARIO_FINISHED:
            return ScenarioFinished(
                cid=cid,
                parent_id=event["parent_id"],
                id=event["id"],
            )
        elif event_type == EventType.STEP_FINISHED:
            return StepFinished(
                cid=cid,
                parent_id=event["parent_id"],
                id=event["id"],
                name=event["name"],
                keyword=event.get("keyword", ""),
                tags=event.get("tags", []),
                uri=event.get("uri"),
                line=event.get("line"),
                result=self._parse_result(event.get("result")),
                embeddings=self._parse_embeddings(event.get("embeddings", [])),
                arguments=event.get("arguments", []),
            )
        elif event_type == EventType.HOOK_FINISHED:
            return HookFinished(
                cid=cid,
                parent_id=event["parent_id"],
                id=event["id"],
                name=event["name"],
                keyword=event.get("keyword", ""),
                tags=event.get("tags", []),
                uri=event.get("uri"),
                line=event.get("line"),
                result=self._parse_result(event.get("result")),
                embeddings=self._parse_embeddings(event.get("embeddings", [])),
            )
        return RunMetadata(
            cid=cid,
            browser=event.get("browser"),
            device=event.get("device"),
        )

    def _parse_result(self, result_data: dict | None) -> StepResult:
        """Parse a step result; a missing result means the step passed."""
        if result_data is None:
            return StepResult()
        return StepResult(
            status=StepStatus(result_data["status"]),
            duration=result_data.get("duration"),
            error_message=result_data.get("error_message"),
        )

    def _parse_embeddings(self, embeddings: list[dict]) -> list[EmbeddingPayload]:
        return [
            EmbeddingPayload(data=embedding["data"], mime_type=embedding["mime_type"])
            for embedding in embeddings
        ]
