"""
Registry of report trees keyed by worker context id.
"""

from __future__ import annotations

import logging
from typing import Iterator

from .models import Report

logger = logging.getLogger(__name__)


class ReportRegistry:
    """
    Owns one Report per worker context.

    A registry is created per test run and handed to whoever builds the
    reports. Each context id maps to its own tree, so workers that only
    ever touch their own id never share state.

    Example:
        registry = ReportRegistry()
        report = registry.get_or_create("0-0")
        assert registry.get_or_create("0-0") is report
    """

    def __init__(self):
        self._reports: dict[str, Report] = {}

    def get_or_create(self, cid: str) -> Report:
        """
        Get the report for a context, creating an empty one on first use.

        Args:
            cid: Worker context id

        Returns:
            The Report owned by this registry for ``cid``
        """
        report = self._reports.get(cid)
        if report is None:
            report = Report()
            self._reports[cid] = report
            logger.info(f"Created report for context: {cid}")
        return report

    def get(self, cid: str) -> Report | None:
        """Get the report for a context without creating it."""
        return self._reports.get(cid)

    def context_ids(self) -> list[str]:
        """Context ids in the order they were first seen."""
        return list(self._reports)

    def __contains__(self, cid: object) -> bool:
        return cid in self._reports

    def __len__(self) -> int:
        return len(self._reports)

    def __iter__(self) -> Iterator[tuple[str, Report]]:
        return iter(list(self._reports.items()))
