"""
Component variants and their lifecycle

A document is an ordered sequence of components. Each component accumulates
raw lines while it is open, is finalized into `text` when it closes, and
knows how to render itself back into directive syntax.

Variants:
    PlainText      literal markup between directives
    Script         [script ... script] block, queued for execution
    ClassSelector  [class Name], swaps the page-state shape
    DataSlot       [name ... name], reads and writes a page-state slot,
                   either RENDERED (visible markup) or COMMENT_ONLY
"""

from enum import Enum
from typing import List, Optional, TYPE_CHECKING

from ..models.directives import DirectiveLine
from ..models.parser import ComponentSummary
from .errors import StateError

if TYPE_CHECKING:
    from .document import Document


class SlotKind(Enum):
    """
    Sub-kinds of data slots

    RENDERED slots are both the data value and literal HTML in the output:
        <!-- [title -->
        Hello
        <!-- title] -->

    COMMENT_ONLY slots are input-only metadata kept inside one comment:
        <!-- [summary
        Notes for the script
        summary] -->
    """
    RENDERED = "rendered"
    COMMENT_ONLY = "comment"


class Component:
    """
    Base class for all document components

    Attributes:
        lines: Raw lines accumulated while the component is open
        text: Finalized text (None until the component is closed)
        document: Owning Document, attached once
        startLine: The directive line that opened the component, if any
    """

    name: Optional[str] = None

    def __init__(self) -> None:
        self.lines: List[str] = []
        self.text: Optional[str] = None
        self.document: Optional["Document"] = None
        self.startLine: Optional[DirectiveLine] = None

    @property
    def finished(self) -> bool:
        return self.text is not None

    def document_attach(self, document: "Document") -> None:
        """Set the back-reference to the owning document; it is never reassigned"""
        if self.document is not None and self.document is not document:
            raise StateError(f"{type(self).__name__} component already belongs to a document")
        self.document = document

    def line_add(self, line: str) -> None:
        self.lines.append(line)

    def start_process(self, directive: DirectiveLine) -> None:
        """Handle the opening directive; self-closing directives finish at once"""
        self.startLine = directive
        if directive.is_self_closing:
            self.text_finish()

    def end_process(self, directive: DirectiveLine) -> None:
        """
        Handle the closing directive.

        Raises:
            StateError: If the closing name differs from the opening name
        """
        if self.startLine is not None and not self.startLine.names_match(directive):
            raise StateError(
                f"Name {directive.name!r} in end comment doesn't match name "
                f"{self.startLine.name!r} in start comment",
                lineNumber=directive.line_number,
                line=directive.line,
            )
        self.text_finish()

    def text_finish(self) -> None:
        self.text = "\n".join(self.lines)
        self.parentPage_add()

    def parentPage_add(self) -> None:
        """Hook run once the text is final; the default does nothing"""
        pass

    def render(self, showSource: bool = True) -> str:
        raise NotImplementedError

    def summary(self) -> ComponentSummary:
        return ComponentSummary(type(self).__name__, self.name, None, self.text)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r}, lines={len(self.lines)})"


class PlainText(Component):
    """Literal markup that is not assigned to any slot and never changes"""

    def render(self, showSource: bool = True) -> str:
        return f"{self.text}\n"


class Script(Component):
    """
    Script block queued on the document for out-of-band execution

    Attributes:
        lineNumber: Line number of the first body line, for diagnostics
    """

    name = 'script'

    def __init__(self, lineNumber: int) -> None:
        super().__init__()
        self.lineNumber = lineNumber

    def parentPage_add(self) -> None:
        self.document.script_enqueue(self)

    def render(self, showSource: bool = True) -> str:
        if not showSource:
            return ""
        return f"<!-- [script\n{self.text}\nscript] -->\n"


class ClassSelector(Component):
    """
    Shape selector: closing it swaps the document's page state

    Attributes:
        identifier: Registered shape name
    """

    name = 'class'

    def __init__(self, identifier: str) -> None:
        super().__init__()
        self.identifier = identifier

    def parentPage_add(self) -> None:
        self.document.pageState_swap(self.identifier)

    def render(self, showSource: bool = True) -> str:
        if not showSource:
            return ""
        return f"<!-- [class {self.identifier}] -->\n"

    def summary(self) -> ComponentSummary:
        return ComponentSummary(type(self).__name__, self.name, self.identifier, self.text)


class DataSlot(Component):
    """
    Named page-state slot

    Closing writes the parsed text into the page state. Rendering re-reads
    the current value, so script changes made after parsing are visible.

    Attributes:
        name: Slot name (case-sensitive)
        kind: SlotKind.RENDERED or SlotKind.COMMENT_ONLY
    """

    def __init__(self, name: str, kind: SlotKind) -> None:
        super().__init__()
        self.name = name
        self.kind = kind

    def end_process(self, directive: DirectiveLine) -> None:
        super().end_process(directive)
        if self.kind is SlotKind.RENDERED and not directive.has_comment_open:
            raise StateError(
                "End comment for rendered slot does not have a comment start",
                lineNumber=directive.line_number,
                line=directive.line,
            )
        if self.kind is SlotKind.COMMENT_ONLY and directive.has_comment_open:
            raise StateError(
                "End comment for comment-only slot has an unexpected comment start",
                lineNumber=directive.line_number,
                line=directive.line,
            )

    def parentPage_add(self) -> None:
        self.document.slot_set(self.name, self.text)

    def value_get(self) -> str:
        value = self.document.slot_get(self.name)
        return "" if value is None else str(value)

    def render(self, showSource: bool = True) -> str:
        value = self.value_get()
        if self.kind is SlotKind.RENDERED:
            if not showSource:
                return f"{value}\n" if value else ""
            if not value:
                return f"<!-- [{self.name}] -->\n"
            return f"<!-- [{self.name} -->\n{value}\n<!-- {self.name}] -->\n"

        if not showSource:
            return ""
        return f"<!-- [{self.name}\n{value}\n{self.name}] -->\n"

    def summary(self) -> ComponentSummary:
        return ComponentSummary(type(self).__name__, self.name, self.kind.value, self.text)
