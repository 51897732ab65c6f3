"""Question handling pipeline."""

from docubot.bot.pipeline import AskResult, DocuBot, default_llm_factory, spawn
from docubot.bot.schemas import AskRequest, Outcome, RequestOverrides

__all__ = [
    "AskRequest",
    "AskResult",
    "DocuBot",
    "Outcome",
    "RequestOverrides",
    "default_llm_factory",
    "spawn",
]
