"""Configuration constants.

Re-exports all constants for convenient importing:
    from docubot.constants import MAX_QUESTION_LENGTH, PER_PAGE_CHAR_LIMIT
"""

from docubot.constants.security import *  # noqa: F403
from docubot.constants.docs import *  # noqa: F403
from docubot.constants.pricing import *  # noqa: F403
from docubot.constants.llm import *  # noqa: F403
from docubot.constants.slack import *  # noqa: F403
