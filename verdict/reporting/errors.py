"""
Errors raised by the report builder.
"""

from __future__ import annotations


class ReportError(Exception):
    """Base class for report building errors."""


class ParentNotFoundError(ReportError, LookupError):
    """
    An event referenced a feature or scenario that is not in the report.

    Events for a child must never precede the event for its parent, so
    this signals a broken event stream rather than a transient condition.
    """

    def __init__(self, cid: str, kind: str, parent_id: str):
        self.cid = cid
        self.kind = kind
        self.parent_id = parent_id
        super().__init__(
            f"No {kind} with id '{parent_id}' in report for context '{cid}'"
        )
