"""
Report data models for Cucumber-style JSON reports.

This module defines the report tree built for a single worker context:
Report -> Feature -> Scenario -> Step, plus embeddings and run metadata.
Every node knows how to render itself into the outbound JSON document.
"""

from __future__ import annotations

import base64
import json
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class StepStatus(str, Enum):
    """Execution status of a step or hook."""
    PASSED = "passed"
    FAILED = "failed"
    SKIPPED = "skipped"
    PENDING = "pending"
    UNDEFINED = "undefined"
    AMBIGUOUS = "ambiguous"


@dataclass
class StepResult:
    """Outcome of a step: status plus optional timing and error detail."""
    status: StepStatus = StepStatus.PASSED
    duration: int | None = None  # nanoseconds, as reported by the runner
    error_message: str | None = None

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"status": self.status.value}
        if self.duration is not None:
            result["duration"] = self.duration
        if self.error_message is not None:
            result["error_message"] = self.error_message
        return result


@dataclass
class Embedding:
    """An attachment (screenshot, log, ...) associated with a step."""
    data: str | bytes
    mime_type: str

    def to_dict(self) -> dict[str, Any]:
        data = self.data
        if isinstance(data, bytes):
            data = base64.b64encode(data).decode("ascii")
        return {
            "data": data,
            "media": {"type": self.mime_type},
        }


@dataclass
class BrowserInfo:
    name: str | None
    version: str

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "version": self.version}


@dataclass
class PlatformInfo:
    name: str
    version: str

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "version": self.version}


@dataclass
class Metadata:
    """Run metadata attached to every feature of a context."""
    browser: BrowserInfo
    device: str | None
    platform: PlatformInfo

    def to_dict(self) -> dict[str, Any]:
        return {
            "browser": self.browser.to_dict(),
            "device": self.device,
            "platform": self.platform.to_dict(),
        }


@dataclass
class Step:
    """
    A step (or hook) inside a scenario.

    Hooks are stored as steps with ``hidden`` set so that report viewers
    can fold them away.
    """
    id: str
    name: str
    keyword: str = ""
    tags: list[str] = field(default_factory=list)
    uri: str | None = None
    line: int | None = None
    result: StepResult = field(default_factory=StepResult)
    embeddings: list[Embedding] = field(default_factory=list)
    hidden: bool = False

    def to_dict(self) -> dict[str, Any]:
        """Convert to JSON-serializable dict."""
        result: dict[str, Any] = {
            "keyword": self.keyword,
            "name": self.name,
            "id": self.id,
            "tags": list(self.tags),
            "uri": self.uri,
            "line": self.line,
            "result": self.result.to_dict(),
            "embeddings": [embedding.to_dict() for embedding in self.embeddings],
        }
        if self.hidden:
            result["hidden"] = True
        return result


@dataclass
class Scenario:
    """
    A scenario inside a feature.

    ``arguments`` collects display arguments from step events until the
    title is flattened, after which it is ``None`` and ``flattened`` stays
    set so the title is never folded twice.
    """
    id: str
    name: str
    keyword: str = "Scenario"
    type: str = "scenario"
    description: str = ""
    tags: list[str] = field(default_factory=list)
    uri: str | None = None
    line: int | None = None
    steps: list[Step] = field(default_factory=list)
    arguments: list[Any] | None = field(default_factory=list)
    flattened: bool = field(default=False, repr=False)

    def to_dict(self) -> dict[str, Any]:
        """Convert to JSON-serializable dict."""
        result: dict[str, Any] = {
            "keyword": self.keyword,
            "type": self.type,
            "name": self.name,
            "description": self.description,
            "id": self.id,
            "tags": list(self.tags),
            "uri": self.uri,
            "line": self.line,
            "steps": [step.to_dict() for step in self.steps],
        }
        if self.arguments is not None:
            result["arguments"] = list(self.arguments)
        return result


@dataclass
class Feature:
    """A feature file and the scenarios executed from it."""
    id: str
    name: str
    keyword: str = "Feature"
    type: str = "feature"
    description: str = ""
    tags: list[str] = field(default_factory=list)
    uri: str | None = None
    line: int | None = None
    metadata: Metadata | None = None
    elements: list[Scenario] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Convert to JSON-serializable dict."""
        result: dict[str, Any] = {
            "keyword": self.keyword,
            "type": self.type,
            "name": self.name,
            "description": self.description,
            "id": self.id,
            "tags": list(self.tags),
            "uri": self.uri,
            "line": self.line,
        }
        if self.metadata is not None:
            result["metadata"] = self.metadata.to_dict()
        result["elements"] = [scenario.to_dict() for scenario in self.elements]
        return result


@dataclass
class Report:
    """Root of the report tree for one worker context."""
    features: list[Feature] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Convert to JSON-serializable dict."""
        return {"features": [feature.to_dict() for feature in self.features]}

    def to_json(self, indent: int = 2) -> str:
        """Convert to JSON string."""
        return json.dumps(self.to_dict(), indent=indent, default=str)
