"""Cost calculator fast path."""

from docubot.cost.calculator import (
    CostBreakdown,
    CostParameters,
    CostResult,
    calculate_cost,
    compute_cost,
    is_cost_question,
    parse_parameters,
)

__all__ = [
    "CostBreakdown",
    "CostParameters",
    "CostResult",
    "calculate_cost",
    "compute_cost",
    "is_cost_question",
    "parse_parameters",
]
