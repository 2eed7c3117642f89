"""
Lifecycle Events for Report Building

This package defines the typed events a test runner emits while a run
progresses, and loads recorded runs from YAML event logs.

Structure:
    - models.py: Event dataclasses and the EventLog container
    - validation.py: Schema validation with helpful error messages
    - parser.py: Converts validated YAML to typed events
    - loader.py: Public API for loading event logs

Usage:
    from verdict.events import load_event_log

    event_log, result = load_event_log("runs/nightly.yaml")
    if not result.is_valid:
        print(result)
        sys.exit(1)

    for event in event_log.events:
        print(type(event).__name__, event.cid)
"""

# Models
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

# Validation
from .validation import (
    EventLogValidator,
    ValidationError,
    ValidationResult,
)

# Parser
from .parser import EventLogParser

# Loader (main public API)
from .loader import (
    load_event_log,
    validate_event_log_yaml,
)

__all__ = [
    # Loader functions
    "load_event_log",
    "validate_event_log_yaml",
    # Models
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
    # Validation
    "EventLogValidator",
    "ValidationError",
    "ValidationResult",
    # Parser
    "EventLogParser",
]
