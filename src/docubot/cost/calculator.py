"""Runtime cost calculator.

Answers pricing questions without touching the documentation or the LLM:
memory, duration and execution count are pulled out of the question text and
run through the published pricing formula.
"""

import logging
import re
from dataclasses import dataclass

from docubot.constants.pricing import (
    DAYS_PER_MONTH,
    FREE_EXECUTIONS,
    FREE_GB_SECONDS,
    MB_PER_GB,
    PRICE_PER_EXECUTION,
    PRICE_PER_GB_SECOND,
    PRICING_URL,
)
from docubot.constants.slack import BOT_HEADER, BOT_NAME

logger = logging.getLogger(__name__)

_COST_KEYWORDS = ("cost", "price", "pricing", "calculate")

_MEMORY_PATTERN = re.compile(r"(\d[\d,]*)\s*MB\b", re.IGNORECASE)
_DURATION_PATTERN = re.compile(r"(\d[\d,]*)\s*s(?:ec(?:ond)?s?)?\b", re.IGNORECASE)
_EXECUTIONS_PATTERN = re.compile(r"(\d[\d,]*)\s*(?:times?|executions?)\b", re.IGNORECASE)
_DAILY_PATTERN = re.compile(r"daily|per\s+day|each\s+day", re.IGNORECASE)

EXAMPLE_QUESTION = "Calculate costs for 512MB running 5s, 100 times daily"
CALCULATOR_HEADER = f"🤖 *{BOT_NAME} - Cost Calculator*"


@dataclass(frozen=True)
class CostParameters:
    """Usage figures extracted from a question. Missing values are None."""

    memory_mb: int | None = None
    duration_s: int | None = None
    executions: int | None = None

    @property
    def complete(self) -> bool:
        return all(
            value is not None for value in (self.memory_mb, self.duration_s, self.executions)
        )


@dataclass(frozen=True)
class CostBreakdown:
    """Monthly cost for one configuration."""

    memory_gb: float
    gb_seconds: float
    memory_cost: float
    execution_cost: float

    @property
    def total(self) -> float:
        return self.memory_cost + self.execution_cost


@dataclass(frozen=True)
class CostResult:
    """A ready-to-format answer: main text, tip and link."""

    answer: str
    pro_tip: str
    learn_more_url: str = PRICING_URL


def is_cost_question(question: str) -> bool:
    """Check whether a question asks about pricing."""
    lower = question.lower()
    if any(keyword in lower for keyword in _COST_KEYWORDS):
        return True
    return "how much" in lower and "$" in lower


def _to_int(raw: str) -> int:
    return int(raw.replace(",", ""))


def parse_parameters(question: str) -> CostParameters:
    """Extract memory (MB), duration (s) and monthly executions from text.

    A daily execution count is scaled to a month.
    """
    memory_match = _MEMORY_PATTERN.search(question)
    duration_match = _DURATION_PATTERN.search(question)
    executions_match = _EXECUTIONS_PATTERN.search(question)

    executions = None
    if executions_match:
        executions = _to_int(executions_match.group(1))
        if _DAILY_PATTERN.search(question):
            executions *= DAYS_PER_MONTH

    return CostParameters(
        memory_mb=_to_int(memory_match.group(1)) if memory_match else None,
        duration_s=_to_int(duration_match.group(1)) if duration_match else None,
        executions=executions,
    )


def compute_cost(memory_mb: int, duration_s: int, executions: int) -> CostBreakdown:
    """Apply the pricing formula, free tier first."""
    memory_gb = memory_mb / MB_PER_GB
    gb_seconds = memory_gb * duration_s * executions
    memory_cost = max(0.0, gb_seconds - FREE_GB_SECONDS) * PRICE_PER_GB_SECOND
    execution_cost = max(0, executions - FREE_EXECUTIONS) * PRICE_PER_EXECUTION
    return CostBreakdown(
        memory_gb=memory_gb,
        gb_seconds=gb_seconds,
        memory_cost=memory_cost,
        execution_cost=execution_cost,
    )


def _guidance() -> CostResult:
    answer = (
        f"{CALCULATOR_HEADER}\n\n"
        "To calculate costs, I need:\n"
        "• Memory (MB): e.g., 512MB\n"
        "• Duration (seconds): e.g., 5s\n"
        "• Executions per month: e.g., 100 times\n\n"
        f'Example: "{EXAMPLE_QUESTION}"'
    )
    return CostResult(
        answer=answer,
        pro_tip=(
            "Lower memory allocation = lower costs. "
            "Start with 256-512 MB and scale up only if needed."
        ),
    )


def _format_breakdown(params: CostParameters, cost: CostBreakdown) -> str:
    return (
        f"{CALCULATOR_HEADER}\n\n"
        "*Configuration:*\n"
        f"• Memory: {params.memory_mb} MB ({cost.memory_gb:.2f} GB)\n"
        f"• Duration: {params.duration_s}s per execution\n"
        f"• Executions: {params.executions:,} per month\n\n"
        "*Calculations:*\n"
        f"• GB-seconds: {cost.gb_seconds:,.2f} (Free tier: {FREE_GB_SECONDS:,})\n"
        f"• Memory cost: ${cost.memory_cost:.4f}\n"
        f"• Execution cost: ${cost.execution_cost:.4f}\n\n"
        f"*Total: ${cost.total:.2f}/month*"
    )


def calculate_cost(question: str) -> CostResult:
    """Answer a cost question.

    Returns guidance on the expected format when any parameter is missing.
    """
    try:
        params = parse_parameters(question)
        if not params.complete:
            logger.info(f"Cost question missing parameters: {params}")
            return _guidance()

        cost = compute_cost(params.memory_mb, params.duration_s, params.executions)
        if cost.total == 0:
            tip = "Your usage fits within the free tier! 🎉"
        else:
            tip = (
                "To reduce costs: Lower memory allocation, optimize execution time, "
                "or cache results to reduce executions."
            )
        return CostResult(answer=_format_breakdown(params, cost), pro_tip=tip)
    except (ValueError, ArithmeticError) as e:
        logger.error(f"Error calculating costs: {e}")
        return CostResult(
            answer=(
                f"{BOT_HEADER}\n\nI had trouble parsing your cost question. "
                f'Try this format:\n"{EXAMPLE_QUESTION}"'
            ),
            pro_tip="Include memory (MB), duration (seconds), and number of executions.",
        )
