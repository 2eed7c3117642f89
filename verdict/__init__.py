"""
Verdict - Cucumber JSON Report Builder

This package assembles Cucumber-style JSON reports from the lifecycle
events of a test run executed across one or more worker contexts.

Subpackages:
    - reporting: Report tree, per-context registry and the ReportBuilder
    - events: Typed lifecycle events and YAML event log loading

Usage:
    from verdict import ReportBuilder, load_event_log, replay_events

    event_log, result = load_event_log("runs/nightly.yaml")
    builder = ReportBuilder()
    replay_events(builder, event_log.events)

    for cid in builder.context_ids():
        builder.save_json(cid, f"reports/{cid}.json")
"""

__version__ = "0.1.0"

# Re-export reporting for convenience
from .reporting import (
    # Models
    BrowserInfo,
    Embedding,
    Feature,
    Metadata,
    PlatformInfo,
    Report,
    Scenario,
    Step,
    StepResult,
    StepStatus,
    # Errors
    ParentNotFoundError,
    ReportError,
    # Registry and builder
    ReportRegistry,
    ReportBuilder,
    platform_id,
)

# Re-export events for convenience
from .events import (
    # Loader functions
    load_event_log,
    validate_event_log_yaml,
    # Models
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
    # Validation
    ValidationError,
    ValidationResult,
)

# Replay
from .replay import ReplayResult, dispatch, replay_events

__all__ = [
    # Package info
    "__version__",
    # Reporting - Models
    "BrowserInfo",
    "Embedding",
    "Feature",
    "Metadata",
    "PlatformInfo",
    "Report",
    "Scenario",
    "Step",
    "StepResult",
    "StepStatus",
    # Reporting - Errors
    "ParentNotFoundError",
    "ReportError",
    # Reporting - Registry and builder
    "ReportRegistry",
    "ReportBuilder",
    "platform_id",
    # Events - Loader functions
    "load_event_log",
    "validate_event_log_yaml",
    # Events - Models
    "EmbeddingPayload",
    "Event",
    "EventLog",
    "EventType",
    "FeatureStarted",
    "HookFinished",
    "RunMetadata",
    "ScenarioFinished",
    "ScenarioStarted",
    "StepFinished",
    # Events - Validation
    "ValidationError",
    "ValidationResult",
    # Replay
    "ReplayResult",
    "dispatch",
    "replay_events",
]
