"""
Directive line model and reserved keyword table

A directive line is one input line recognized as opening, closing or
referencing a component:

    <!-- [title] -->            self-contained slot reference
    <!-- [title -->             open a rendered slot
    <!-- title] -->             close a rendered slot
    <!-- [summary               open a comment-only slot
    summary] -->                close a comment-only slot
    <!-- [script                open a script block
    script] -->                 close a script block
    <!-- [class Article] -->    select a page-state shape

Reserved keywords are a closed, immutable table. Every other name addresses
a page-state slot.
"""

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import FrozenSet, Mapping, Optional


class KeywordCategory(Enum):
    """
    Categories of reserved directive keywords
    """
    CODE = "code"      # [script ... script]
    SHAPE = "shape"    # [class Name]


@dataclass(frozen=True)
class KeywordSpec:
    """
    Specification for a reserved directive keyword

    Attributes:
        name: Keyword as written in canonical (lower case) form
        category: Category for organization
        description: Human-readable description
        takes_value: Whether the opening line carries an inline argument
        requires_body: Whether a self-closing form is invalid
        self_closing_only: Whether only the self-closing form is valid
    """
    name: str
    category: KeywordCategory
    description: str
    takes_value: bool = False
    requires_body: bool = False
    self_closing_only: bool = False


RESERVED_KEYWORDS: Mapping[str, KeywordSpec] = MappingProxyType({
    'script': KeywordSpec(
        name='script',
        category=KeywordCategory.CODE,
        description="Script block run against page state before rendering",
        requires_body=True,
    ),
    'class': KeywordSpec(
        name='class',
        category=KeywordCategory.SHAPE,
        description="Swap the page state for a fresh instance of a named shape",
        takes_value=True,
        self_closing_only=True,
    ),
})


# Slots installed on every page state; data slots may not reuse these names
BUILTIN_SLOTS: FrozenSet[str] = frozenset({
    'fileName',       # absolute source path
    'fileDir',        # directory containing the source
    'baseFileName',   # base name of the source
})


def keyword_get(name: str) -> Optional[KeywordSpec]:
    """Look up a reserved keyword, case-insensitively"""
    return RESERVED_KEYWORDS.get(name.lower())


def keyword_is(name: str) -> bool:
    """Check if a directive name is a reserved keyword"""
    return keyword_get(name) is not None


@dataclass(frozen=True)
class DirectiveLine:
    """
    Result of matching one input line against the directive grammar

    Attributes:
        has_comment_open: Line carries the "<!--" marker
        has_comment_close: Line carries the "-->" marker
        has_section_open: Line carries the "[" marker before the name
        has_section_close: Line carries the "]" marker after the name
        is_data_slot: Name addresses a page-state slot, not a keyword
        name: Slot name or reserved keyword, as written
        value: Optional inline argument (only "class" takes one)
        line: The original line text
        line_number: One-based line number in the source document

    Example:
        "<!-- [title -->" at line 3:
        DirectiveLine(has_comment_open=True, has_comment_close=True,
                      has_section_open=True, has_section_close=False,
                      is_data_slot=True, name="title", value=None,
                      line="<!-- [title -->", line_number=3)
    """
    has_comment_open: bool
    has_comment_close: bool
    has_section_open: bool
    has_section_close: bool
    is_data_slot: bool
    name: str
    value: Optional[str] = None
    line: str = ""
    line_number: int = 0

    @property
    def is_directive(self) -> bool:
        """At least one comment marker AND at least one section marker"""
        return (self.has_comment_open or self.has_comment_close) and (
            self.has_section_open or self.has_section_close
        )

    @property
    def is_self_closing(self) -> bool:
        return self.has_section_open and self.has_section_close

    @property
    def keyword(self) -> Optional[str]:
        """Canonical keyword name, or None for data slots"""
        if self.is_data_slot:
            return None
        return self.name.lower()

    def names_match(self, other: "DirectiveLine") -> bool:
        """
        Check whether a closing directive names the same component.

        Reserved keywords compare case-insensitively; slot names address
        page-state entries and compare exactly.
        """
        if self.is_data_slot != other.is_data_slot:
            return False
        if self.is_data_slot:
            return self.name == other.name
        return self.name.lower() == other.name.lower()

    def validate(self) -> None:
        """
        Check structural validity of a line already classified as a directive.

        Raises:
            GrammarError: With the offending line and the reason
        """
        spec = None if self.is_data_slot else keyword_get(self.name)

        if self.is_data_slot and self.name in BUILTIN_SLOTS:
            self.error(f"Slot name {self.name!r} is reserved for a built-in slot")
        if self.is_self_closing and not (self.has_comment_open and self.has_comment_close):
            self.error("Empty section, but is not a closed comment")
        if not self.has_section_open and not self.has_comment_close:
            self.error("End of section in comment start")
        if not self.has_section_close and not self.has_comment_open:
            self.error("Start of section in comment end")
        if spec is not None and spec.requires_body and self.is_self_closing:
            self.error(f"Empty {spec.name} section")
        if spec is not None and spec.self_closing_only and not self.is_self_closing:
            self.error(f"A {spec.name} directive must be a single self-closing line")
        if self.value is not None and (spec is None or not spec.takes_value):
            self.error(f"Directive {self.name!r} does not take an argument")
        if spec is not None and spec.takes_value and self.has_section_open and not self.value:
            self.error(f"Directive {spec.name!r} requires an argument")

    def error(self, message: str) -> None:
        """Raise GrammarError for this line"""
        from ..lib.errors import GrammarError
        raise GrammarError(message, lineNumber=self.line_number, line=self.line)

    def __str__(self) -> str:
        return (
            f"{'<!-- ' if self.has_comment_open else ''}"
            f"{'[' if self.has_section_open else ''}"
            f"{self.name}"
            f"{' ' + self.value if self.value else ''}"
            f"{']' if self.has_section_close else ''}"
            f"{' -->' if self.has_comment_close else ''}"
        )
