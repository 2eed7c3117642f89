"""
Lookup helpers for locating nodes inside a report tree.

All functions are pure scans in insertion order and return ``None`` when
nothing matches; deciding whether a miss is an error is up to the caller.
"""

from __future__ import annotations

from .models import Feature, Report, Scenario, Step


def find_feature_by_id(report: Report, feature_id: str) -> Feature | None:
    """Return the first feature with the given id."""
    for feature in report.features:
        if feature.id == feature_id:
            return feature
    return None


def find_scenario_by_parent_id(
    report: Report,
    parent_id: str,
) -> tuple[Feature, Scenario] | None:
    """
    Find the scenario a step or hook belongs to.

    Step events only carry the id of their scenario, so every feature is
    scanned. Scenario ids are expected to be unique within a context; if
    one is reused across features, the first match in insertion order wins.

    Args:
        report: The report to search
        parent_id: Id of the scenario owning the step or hook

    Returns:
        (feature, scenario) pair, or None if no scenario has that id
    """
    for feature in report.features:
        for scenario in feature.elements:
            if scenario.id == parent_id:
                return feature, scenario
    return None


def find_scenario_by_id(feature: Feature, scenario_id: str) -> Scenario | None:
    """Return the scenario with the given id under a feature."""
    for scenario in feature.elements:
        if scenario.id == scenario_id:
            return scenario
    return None


def find_step_index(scenario: Scenario, step_id: str) -> int | None:
    """Return the position of the step with the given id, if present."""
    for index, step in enumerate(scenario.steps):
        if step.id == step_id:
            return index
    return None


def find_step_by_id(scenario: Scenario, step_id: str) -> Step | None:
    index = find_step_index(scenario, step_id)
    if index is None:
        return None
    return scenario.steps[index]
