"""
Report building for Cucumber-style test runs.

This package turns lifecycle events from one or more worker contexts
into per-context report trees (feature -> scenario -> step).

Features:
    - One independent report per worker context id
    - Idempotent scenario insert, in-place step upsert
    - Hooks recorded as hidden steps
    - Run metadata (browser, device, platform) on every feature
    - Scenario argument flattening and empty-feature pruning
    - JSON serialization of read-only snapshots

Usage:
    from verdict.events import FeatureStarted, ScenarioStarted, StepFinished
    from verdict.reporting import ReportBuilder

    builder = ReportBuilder()
    builder.add_feature(FeatureStarted(cid="0-0", id="login", name="Login"))
    builder.add_scenario(ScenarioStarted(
        cid="0-0", parent_id="login", id="valid", name="Valid login",
    ))
    builder.add_step(StepFinished(
        cid="0-0", parent_id="valid", id="s1", name="I sign in",
    ))

    builder.finalize("0-0")
    builder.save_json("0-0", "reports/0-0.json")
"""

# Models
from .models import (
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
)

# Errors
from .errors import ParentNotFoundError, ReportError

# Lookup
from .locator import (
    find_feature_by_id,
    find_scenario_by_id,
    find_scenario_by_parent_id,
    find_step_by_id,
    find_step_index,
)

# Registry and builder
from .registry import ReportRegistry
from .builder import ReportBuilder
from .host import os_version, platform_id

__all__ = [
    # Models
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
    # Errors
    "ParentNotFoundError",
    "ReportError",
    # Lookup
    "find_feature_by_id",
    "find_scenario_by_id",
    "find_scenario_by_parent_id",
    "find_step_by_id",
    "find_step_index",
    # Registry and builder
    "ReportRegistry",
    "ReportBuilder",
    "os_version",
    "platform_id",
]
