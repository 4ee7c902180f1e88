from __future__ import annotations


class ChartDataError(ValueError):
    """Raised when chart input data violates a geometry precondition."""
