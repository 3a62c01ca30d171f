"""
Models package for regenerate

Contains data structures and type definitions for the regeneration pipeline.
"""

from .state import ProgramState, pipeline
from .directives import (
    DirectiveLine,
    KeywordSpec,
    KeywordCategory,
    RESERVED_KEYWORDS,
    BUILTIN_SLOTS,
)
from .page import PageState
from .parser import ParserState, ComponentSummary
from .results import WriteResult, RegenerateResult

__all__ = [
    "ProgramState",
    "pipeline",
    "DirectiveLine",
    "KeywordSpec",
    "KeywordCategory",
    "RESERVED_KEYWORDS",
    "BUILTIN_SLOTS",
    "PageState",
    "ParserState",
    "ComponentSummary",
    "WriteResult",
    "RegenerateResult",
]
