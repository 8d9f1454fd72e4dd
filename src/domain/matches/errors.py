"""Match lifecycle validation errors."""

from __future__ import annotations


class MatchLifecycleError(ValueError):
    """Base class for caller-side validation failures during a match."""


class MatchStateError(MatchLifecycleError):
    """Raised on an operation that the match's current status does not allow."""


class InvalidScoreError(MatchLifecycleError):
    """Raised when a gross score is missing, negative or not an integer."""


class TeamShapeError(MatchLifecycleError):
    """Raised when a roster does not fit the match format."""


__all__ = ["InvalidScoreError", "MatchLifecycleError", "MatchStateError", "TeamShapeError"]
