"""
Report builder applying lifecycle events to per-context report trees.

This module provides the ReportBuilder class, the only component allowed
to mutate report trees. Each handler looks up everything it needs before
touching the tree, so a failed event leaves the report unchanged.
"""

from __future__ import annotations

import copy
import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any

from .errors import ParentNotFoundError
from .host import os_version, platform_id
from .locator import (
    find_feature_by_id,
    find_scenario_by_id,
    find_scenario_by_parent_id,
    find_step_index,
)
from .models import (
    BrowserInfo,
    Embedding,
    Feature,
    Metadata,
    PlatformInfo,
    Report,
    Scenario,
    Step,
)
from .registry import ReportRegistry

if TYPE_CHECKING:
    from ..events.models import (
        EmbeddingPayload,
        FeatureStarted,
        HookFinished,
        RunMetadata,
        ScenarioStarted,
        StepFinished,
    )

logger = logging.getLogger(__name__)


class ReportBuilder:
    """
    Builds Cucumber-style reports from lifecycle events.

    One builder is created per test run. Events from different worker
    contexts are routed to separate report trees by their ``cid``.

    Example:
        from verdict.events import FeatureStarted, ScenarioStarted, StepFinished
        from verdict.reporting import ReportBuilder

        builder = ReportBuilder()
        builder.add_feature(FeatureStarted(cid="0-0", id="login", name="Login"))
        builder.add_scenario(ScenarioStarted(
            cid="0-0", parent_id="login", id="valid", name="Valid login",
        ))
        builder.add_step(StepFinished(
            cid="0-0", parent_id="valid", id="s1", name="I sign in",
            arguments=["admin"],
        ))

        builder.finalize("0-0")
        print(builder.snapshot("0-0").to_json())
    """

    def __init__(self, registry: ReportRegistry | None = None):
        self.registry = registry if registry is not None else ReportRegistry()

    # ─────────────────────────────────────────────────────────────────────
    # Event handlers
    # ─────────────────────────────────────────────────────────────────────

    def add_feature(self, event: FeatureStarted) -> Feature:
        """
        Append a feature to the context's report.

        Feature ids are not deduplicated: starting the same feature twice
        yields two entries.
        """
        report = self.registry.get_or_create(event.cid)
        feature = Feature(
            id=event.id,
            name=event.name,
            keyword=event.keyword,
            type=event.type,
            description=event.description,
            tags=list(event.tags),
            uri=event.uri,
            line=event.line,
        )
        report.features.append(feature)
        logger.debug(f"[{event.cid}] Added feature: {event.id}")
        return feature

    def add_scenario(self, event: ScenarioStarted) -> Scenario:
        """
        Add a scenario under its feature unless one with that id exists.

        Returns:
            The new scenario, or the existing one if the id was known

        Raises:
            ParentNotFoundError: If the parent feature is not in the report
        """
        report = self.registry.get_or_create(event.cid)
        feature = find_feature_by_id(report, event.parent_id)
        if feature is None:
            raise ParentNotFoundError(event.cid, "feature", event.parent_id)

        existing = find_scenario_by_id(feature, event.id)
        if existing is not None:
            logger.debug(f"[{event.cid}] Scenario already present: {event.id}")
            return existing

        scenario = Scenario(
            id=event.id,
            name=event.name,
            keyword=event.keyword,
            type=event.type,
            description=event.description,
            tags=list(event.tags),
            uri=event.uri,
            line=event.line,
        )
        feature.elements.append(scenario)
        logger.debug(f"[{event.cid}] Added scenario: {event.id} to feature {feature.id}")
        return scenario

    def add_step(self, event: StepFinished) -> Step:
        """
        Insert or replace a step in its scenario.

        A step whose id already exists in the scenario is replaced at the
        same position. The event's arguments are merged into the scenario's
        argument list, keeping first-seen order without duplicates. Values
        of different types (1 and True) count as distinct. Once the title
        has been flattened, further arguments are ignored.

        Raises:
            ParentNotFoundError: If no scenario has the parent id
        """
        scenario = self._find_step_parent(event.cid, event.parent_id)
        step = Step(
            id=event.id,
            name=event.name,
            keyword=event.keyword,
            tags=list(event.tags),
            uri=event.uri,
            line=event.line,
            result=copy.deepcopy(event.result),
            embeddings=_convert_embeddings(event.embeddings),
        )

        index = find_step_index(scenario, event.id)
        if index is None:
            scenario.steps.append(step)
            logger.debug(f"[{event.cid}] Added step: {event.id} to scenario {scenario.id}")
        else:
            scenario.steps[index] = step
            logger.debug(f"[{event.cid}] Replaced step: {event.id} in scenario {scenario.id}")

        if not scenario.flattened:
            for argument in event.arguments:
                if not _contains(scenario.arguments, argument):
                    scenario.arguments.append(argument)

        return step

    def add_hook(self, event: HookFinished) -> Step:
        """
        Append a hook to its scenario as a hidden step.

        Hooks are never matched by id, so submitting the same hook twice
        records it twice.

        Raises:
            ParentNotFoundError: If no scenario has the parent id
        """
        scenario = self._find_step_parent(event.cid, event.parent_id)
        hook = Step(
            id=event.id,
            name=event.name,
            keyword=event.keyword,
            tags=list(event.tags),
            uri=event.uri,
            line=event.line,
            result=copy.deepcopy(event.result),
            embeddings=_convert_embeddings(event.embeddings),
            hidden=True,
        )
        scenario.steps.append(hook)
        logger.debug(f"[{event.cid}] Added hook: {event.id} to scenario {scenario.id}")
        return hook

    def add_meta(self, event: RunMetadata) -> None:
        """
        Attach run metadata to every feature currently in the report.

        Each call overwrites the metadata of all features, so the latest
        event wins. Features added afterwards get no metadata until the
        next call.
        """
        report = self.registry.get_or_create(event.cid)
        platform_name = platform_id()
        platform_version = os_version()

        for feature in report.features:
            feature.metadata = Metadata(
                browser=BrowserInfo(
                    name=event.browser,
                    version=_display_version(event.browser),
                ),
                device=event.device,
                platform=PlatformInfo(name=platform_name, version=platform_version),
            )
        logger.debug(
            f"[{event.cid}] Applied metadata to {len(report.features)} feature(s): "
            f"browser={event.browser}, platform={platform_name}"
        )

    # ─────────────────────────────────────────────────────────────────────
    # Finishing passes
    # ─────────────────────────────────────────────────────────────────────

    def flatten_title(self, cid: str, parent_id: str, scenario_id: str) -> Scenario:
        """
        Append collected arguments to a scenario's name.

        The scenario name gets `` (a, b)`` appended when arguments were
        collected; the argument list is then dropped from the scenario.
        Calling this again on the same scenario changes nothing.

        Args:
            cid: Worker context id
            parent_id: Id of the feature owning the scenario
            scenario_id: Id of the scenario

        Raises:
            ParentNotFoundError: If the feature or scenario is not found
        """
        report = self.registry.get_or_create(cid)
        feature = find_feature_by_id(report, parent_id)
        if feature is None:
            raise ParentNotFoundError(cid, "feature", parent_id)
        scenario = find_scenario_by_id(feature, scenario_id)
        if scenario is None:
            raise ParentNotFoundError(cid, "scenario", scenario_id)

        _flatten(scenario)
        return scenario

    def flatten_titles(self, cid: str) -> None:
        """Flatten the title of every scenario in a context's report."""
        report = self.registry.get(cid)
        if report is None:
            return
        for feature in report.features:
            for scenario in feature.elements:
                _flatten(scenario)

    def prune_empty_features(self, cid: str | None = None) -> int:
        """
        Drop features that ended up without scenarios.

        Args:
            cid: Only prune this context (all contexts if None)

        Returns:
            Number of features removed
        """
        if cid is None:
            reports = [report for _, report in self.registry]
        else:
            report = self.registry.get(cid)
            reports = [report] if report is not None else []

        removed = 0
        for report in reports:
            kept = [feature for feature in report.features if feature.elements]
            removed += len(report.features) - len(kept)
            report.features = kept

        if removed:
            logger.info(f"Pruned {removed} empty feature(s)")
        return removed

    def finalize(self, cid: str) -> None:
        """Run all finishing passes for a context."""
        self.flatten_titles(cid)
        self.prune_empty_features(cid)

    # ─────────────────────────────────────────────────────────────────────
    # Read access
    # ─────────────────────────────────────────────────────────────────────

    def context_ids(self) -> list[str]:
        return self.registry.context_ids()

    def snapshot(self, cid: str) -> Report:
        """
        Get a deep copy of a context's report.

        Changes made to the returned tree never reach the builder.
        Unknown contexts yield an empty report.
        """
        report = self.registry.get(cid)
        if report is None:
            return Report()
        return copy.deepcopy(report)

    def to_dict(self, cid: str) -> dict[str, Any]:
        """Render a context's report as the outbound JSON document."""
        return self.snapshot(cid).to_dict()

    def save_json(self, cid: str, path: str | Path) -> Path:
        """
        Save a context's report to a JSON file.

        Args:
            cid: Worker context id
            path: Path to save the JSON file

        Returns:
            The path written
        """
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(self.snapshot(cid).to_json())
        logger.info(f"[{cid}] Report saved: {path}")
        return path

    # ─────────────────────────────────────────────────────────────────────
    # Helpers
    # ─────────────────────────────────────────────────────────────────────

    def _find_step_parent(self, cid: str, parent_id: str) -> Scenario:
        report = self.registry.get_or_create(cid)
        found = find_scenario_by_parent_id(report, parent_id)
        if found is None:
            raise ParentNotFoundError(cid, "scenario", parent_id)
        _, scenario = found
        return scenario


def _convert_embeddings(payloads: list[EmbeddingPayload]) -> list[Embedding]:
    return [Embedding(data=p.data, mime_type=p.mime_type) for p in payloads]


def _display_version(browser: str | None) -> str:
    """Browser name with its first letter capitalized (e.g. "Chrome")."""
    if not browser:
        return ""
    return browser[0].upper() + browser[1:]


def _contains(arguments: list, value: object) -> bool:
    return any(type(a) is type(value) and a == value for a in arguments)


def _display_argument(argument: object) -> str:
    """Render an argument the way it reads in a feature file."""
    if argument is None:
        return ""
    if isinstance(argument, bool):
        return "true" if argument else "false"
    return str(argument)


def _flatten(scenario: Scenario) -> None:
    if scenario.flattened:
        return
    if scenario.arguments:
        joined = ", ".join(_display_argument(argument) for argument in scenario.arguments)
        scenario.name += f" ({joined})"
    scenario.arguments = None
    scenario.flattened = True
