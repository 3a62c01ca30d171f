"""
Parser-specific data models

Type-safe structures for the document state machine and its results.
"""

from enum import Enum
from typing import NamedTuple, Optional


class ParserState(Enum):
    """
    States of the per-document component state machine

    Transitions (see Parser.line_process):
        NO_COMPONENT_OPEN    --plain line-->      PLAIN_TEXT_OPEN
        PLAIN_TEXT_OPEN      --plain line-->      PLAIN_TEXT_OPEN
        PLAIN_TEXT_OPEN      --directive-->       close text, then as NO_COMPONENT_OPEN
        NO_COMPONENT_OPEN    --open directive-->  NAMED_COMPONENT_OPEN (or stays, if self-closing)
        NAMED_COMPONENT_OPEN --plain line-->      NAMED_COMPONENT_OPEN (body text)
        NAMED_COMPONENT_OPEN --close directive--> NO_COMPONENT_OPEN
    """
    NO_COMPONENT_OPEN = "none"
    PLAIN_TEXT_OPEN = "text"
    NAMED_COMPONENT_OPEN = "named"


class ComponentSummary(NamedTuple):
    """
    Comparable description of one finished component

    Two parses of equivalent documents produce equal summary sequences,
    which is how round-trip idempotence is checked.

    Attributes:
        variant: Component class name ("PlainText", "Script", ...)
        name: Slot name, keyword, or None for plain text
        kind: Slot kind value for data slots, shape identifier for class
              selectors, otherwise None
        text: Finalized component text
    """
    variant: str
    name: Optional[str]
    kind: Optional[str]
    text: Optional[str]
