"""
Replay of recorded lifecycle events through a ReportBuilder.

This plays the part of the test runner: it hands each event to the
matching builder handler and runs the finishing passes at the end.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable

from .events.models import (
    Event,
    FeatureStarted,
    HookFinished,
    RunMetadata,
    ScenarioFinished,
    ScenarioStarted,
    StepFinished,
)
from .reporting import ParentNotFoundError, ReportBuilder

logger = logging.getLogger(__name__)


@dataclass
class SkippedEvent:
    """An event dropped in lenient mode, with the reason."""
    index: int
    event: Event
    error: ParentNotFoundError


@dataclass
class ReplayResult:
    """Outcome of replaying an event stream."""
    applied: int = 0
    skipped: list[SkippedEvent] = field(default_factory=list)
    context_ids: list[str] = field(default_factory=list)

    @property
    def is_clean(self) -> bool:
        return len(self.skipped) == 0


def dispatch(builder: ReportBuilder, event: Event) -> None:
    """
    Route a single event to its handler.

    Raises:
        ParentNotFoundError: If the event references an unknown parent
        ValueError: If the event is not a known event type
    """
    if isinstance(event, FeatureStarted):
        builder.add_feature(event)
    elif isinstance(event, ScenarioStarted):
        builder.add_scenario(event)
    elif isinstance(event, StepFinished):
        builder.add_step(event)
    elif isinstance(event, HookFinished):
        builder.add_hook(event)
    elif isinstance(event, ScenarioFinished):
        builder.flatten_title(event.cid, event.parent_id, event.id)
    elif isinstance(event, RunMetadata):
        builder.add_meta(event)
    else:
        raise ValueError(f"Unsupported event type: {type(event).__name__}")


def replay_events(
    builder: ReportBuilder,
    events: Iterable[Event],
    strict: bool = True,
) -> ReplayResult:
    """
    Apply a stream of events, then finalize every context touched.

    Args:
        builder: The builder receiving the events
        events: Events in emission order
        strict: Re-raise ParentNotFoundError (otherwise log and skip)

    Returns:
        ReplayResult with counts and any skipped events

    Raises:
        ParentNotFoundError: In strict mode, on the first event with an
            unknown parent
    """
    result = ReplayResult()
    seen: dict[str, None] = {}

    for index, event in enumerate(events):
        seen.setdefault(event.cid, None)
        try:
            dispatch(builder, event)
        except ParentNotFoundError as e:
            if strict:
                raise
            logger.warning(f"Skipping event #{index} ({type(event).__name__}): {e}")
            result.skipped.append(SkippedEvent(index=index, event=event, error=e))
            continue
        result.applied += 1

    for cid in seen:
        builder.finalize(cid)

    result.context_ids = list(seen)
    logger.info(
        f"Replayed {result.applied} event(s) across {len(seen)} context(s), "
        f"{len(result.skipped)} skipped"
    )
    return result
