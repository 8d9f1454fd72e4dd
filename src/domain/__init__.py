"""Golf group handicap domain modules."""

from domain.common import MultiSidedResult, SideResult, TwoSidedResult

__all__ = ["MultiSidedResult", "SideResult", "TwoSidedResult"]
