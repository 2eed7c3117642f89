"""
Typed lifecycle events consumed by the report builder.

This module contains the enum of event kinds and one dataclass per kind,
carrying every field a handler needs. All events name the worker context
(``cid``) whose report they update.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Union

from ..reporting.models import StepResult


# ─────────────────────────────────────────────────────────────────────────────
# Enums
# ─────────────────────────────────────────────────────────────────────────────

class EventType(str, Enum):
    """Kind of lifecycle event in a recorded run."""
    FEATURE_STARTED = "feature_started"
    SCENARIO_STARTED = "scenario_started"
    SCENARIO_FINISHED = "scenario_finished"
    STEP_FINISHED = "step_finished"
    HOOK_FINISHED = "hook_finished"
    RUN_METADATA = "run_metadata"


# ─────────────────────────────────────────────────────────────────────────────
# Payload parts
# ─────────────────────────────────────────────────────────────────────────────

@dataclass
class EmbeddingPayload:
    """An attachment as reported by the runner."""
    data: str | bytes
    mime_type: str


# ─────────────────────────────────────────────────────────────────────────────
# Events
# ─────────────────────────────────────────────────────────────────────────────

@dataclass
class FeatureStarted:
    cid: str
    id: str
    name: str
    keyword: str = "Feature"
    type: str = "feature"
    description: str = ""
    tags: list[str] = field(default_factory=list)
    uri: str | None = None
    line: int | None = None


@dataclass
class ScenarioStarted:
    cid: str
    parent_id: str  # feature id
    id: str
    name: str
    keyword: str = "Scenario"
    type: str = "scenario"
    description: str = ""
    tags: list[str] = field(default_factory=list)
    uri: str | None = None
    line: int | None = None


@dataclass
class ScenarioFinished:
    """Signals that a scenario's title can be flattened."""
    cid: str
    parent_id: str  # feature id
    id: str


@dataclass
class StepFinished:
    cid: str
    parent_id: str  # scenario id
    id: str
    name: str
    keyword: str = ""
    tags: list[str] = field(default_factory=list)
    uri: str | None = None
    line: int | None = None
    result: StepResult = field(default_factory=StepResult)
    embeddings: list[EmbeddingPayload] = field(default_factory=list)
    arguments: list[Any] = field(default_factory=list)  # appended to the scenario title


@dataclass
class HookFinished:
    cid: str
    parent_id: str  # scenario id
    id: str
    name: str
    keyword: str = ""
    tags: list[str] = field(default_factory=list)
    uri: str | None = None
    line: int | None = None
    result: StepResult = field(default_factory=StepResult)
    embeddings: list[EmbeddingPayload] = field(default_factory=list)


@dataclass
class RunMetadata:
    cid: str
    browser: str | None = None
    device: str | None = None


# Union type for all event variants
Event = Union[
    FeatureStarted,
    ScenarioStarted,
    ScenarioFinished,
    StepFinished,
    HookFinished,
    RunMetadata,
]


# ─────────────────────────────────────────────────────────────────────────────
# Event Log
# ─────────────────────────────────────────────────────────────────────────────

@dataclass
class EventLog:
    """Fully parsed and validated recording of a test run."""
    version: int
    name: str = ""
    events: list[Event] = field(default_factory=list)

    def context_ids(self) -> list[str]:
        """Context ids in order of first appearance."""
        seen: dict[str, None] = {}
        for event in self.events:
            seen.setdefault(event.cid, None)
        return list(seen)
