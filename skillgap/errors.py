"""Error and warning types raised or recorded by the gap engine."""

from __future__ import annotations


class SkillGapError(Exception):
    """Base class for engine failures."""


class ValidationError(SkillGapError, ValueError):
    """Malformed input: unknown skill identity or a level outside the domain.

    Fails the whole run; no partial report is produced.
    """


class AnalysisCancelled(SkillGapError):
    """The caller's cancellation flag was set while impact was being computed."""


class GraphIntegrityWarning(UserWarning):
    """A relation between known skills closes a cycle in the propagation graph."""

    def __init__(self, from_id: str, to_id: str, kind: str):
        self.from_id = from_id
        self.to_id = to_id
        self.kind = kind
        super().__init__(f"{kind} relation {from_id} -> {to_id} closes a cycle")
