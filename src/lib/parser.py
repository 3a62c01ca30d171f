"""
Document parser: the component state machine driver

Consumes a document one line at a time. Each line is classified by the
grammar recognizer as a directive line or a plain line:

- plain lines accumulate into the open component, opening an implicit
  PlainText component if nothing is open;
- directive lines close any open PlainText and then either open a new
  component or close the open named component.

At end of input an open PlainText closes automatically; an open named
component is a fatal StateError.

Example:
    >>> document = Parser("<!-- [title -->\\nHello\\n<!-- title] -->\\n", "page.html").parse()
    >>> document.components[0].text
    'Hello'
    >>> document.slot_get("title")
    'Hello'
"""

from pathlib import Path
from typing import List, Optional, Union

from ..config import appsettings
from ..models.directives import DirectiveLine
from ..models.parser import ParserState
from .components import ClassSelector, Component, DataSlot, PlainText, Script, SlotKind
from .document import Document
from .errors import PathError, RegenerateError, StateError
from .grammar import line_match
from .log import LOG
from .shapes import ShapeRegistry


def lines_split(source: str) -> List[str]:
    """
    Split text into lines with platform-neutral line endings.

    A final line terminator does not produce a trailing empty line.
    """
    normalized = source.replace('\r\n', '\n').replace('\r', '\n')
    if not normalized:
        return []
    lines = normalized.split('\n')
    if normalized.endswith('\n'):
        lines.pop()
    return lines


class Parser:
    """
    Line-oriented parser for regenerate directives

    Attributes:
        source: Document text being parsed
        document: Document receiving the components
        state: Current ParserState
        current: The open component, if any
        line_number: One-based number of the line being processed
    """

    def __init__(
        self,
        source: str,
        path: Union[str, Path],
        shapes: Optional[ShapeRegistry] = None,
    ) -> None:
        self.source = source
        self.document = Document(path, shapes=shapes)
        self.state = ParserState.NO_COMPONENT_OPEN
        self.current: Optional[Component] = None
        self.line_number = 0

    @classmethod
    def file_parse(
        cls,
        path: Union[str, Path],
        shapes: Optional[ShapeRegistry] = None,
    ) -> Document:
        """
        Read and parse a document from disk.

        Raises:
            PathError: If the file cannot be read
            GrammarError, StateError: If the document is malformed
        """
        path = Path(path)
        LOG(f"Opening {path} ...", level=2)
        try:
            # Text mode applies universal newline normalization
            with open(path, 'r', encoding=appsettings.encoding) as f:
                source = f.read()
        except OSError as e:
            raise PathError(f"Cannot read document: {e}", path=path) from e
        except UnicodeDecodeError as e:
            raise PathError(
                f"Document is not valid {appsettings.encoding}: byte {e.start}: {e.reason}", path=path
            ) from e
        return cls(source, path, shapes=shapes).parse()

    def parse(self) -> Document:
        """
        Parse the whole source into the document's component sequence.

        Returns:
            The populated Document

        Raises:
            GrammarError: A directive-shaped line failed validation
            StateError: Nested open, unmatched close, name mismatch, or a
                        named component still open at end of input
        """
        for line in lines_split(self.source):
            self.line_number += 1
            try:
                self.line_process(line)
            except RegenerateError as e:
                raise e.location_attach(self.document.path, self.line_number, line)
        self.finish()
        LOG(
            f"Parsed {len(self.document.components)} components, "
            f"{len(self.document.scripts)} scripts from {self.document.path.name}",
            level=2,
        )
        return self.document

    def line_process(self, line: str) -> None:
        """Feed one line to the state machine"""
        directive = line_match(line, self.line_number)
        if directive is None:
            self.textLine_process(line)
        else:
            self.directiveLine_process(directive)

    def textLine_process(self, line: str) -> None:
        if self.state is ParserState.NO_COMPONENT_OPEN:
            self.component_start(PlainText())
            self.state = ParserState.PLAIN_TEXT_OPEN
        self.current.line_add(line)

    def directiveLine_process(self, directive: DirectiveLine) -> None:
        LOG(f"Directive at line {self.line_number}: {directive}", level=3)

        # A directive line always ends a plain-text run
        if self.state is ParserState.PLAIN_TEXT_OPEN:
            self.current.text_finish()
            self.component_end()

        if self.state is ParserState.NAMED_COMPONENT_OPEN:
            if directive.has_section_open:
                self.error(f"Nested open not permitted: {directive} inside {self.current.name!r}")
            self.current.end_process(directive)
            self.component_end()
            return

        if not directive.has_section_open:
            self.error(f"Unexpected close {directive}, nothing open")

        component = self.component_make(directive)
        self.component_start(component)
        self.state = ParserState.NAMED_COMPONENT_OPEN
        component.start_process(directive)
        if component.finished:
            self.component_end()

    def component_make(self, directive: DirectiveLine) -> Component:
        """Construct the component variant named by an opening directive"""
        if directive.is_data_slot:
            kind = SlotKind.RENDERED if directive.has_comment_close else SlotKind.COMMENT_ONLY
            return DataSlot(directive.name, kind)
        if directive.keyword == 'script':
            return Script(self.line_number + 1)
        if directive.keyword == 'class':
            return ClassSelector(directive.value)
        # Unreachable while the keyword table and this dispatch agree
        self.error(f"Unknown section type {directive.name!r}")

    def component_start(self, component: Component) -> None:
        self.document.component_add(component)
        self.current = component

    def component_end(self) -> None:
        self.current = None
        self.state = ParserState.NO_COMPONENT_OPEN

    def finish(self) -> None:
        """Close out the document at end of input"""
        if self.state is ParserState.PLAIN_TEXT_OPEN:
            self.current.text_finish()
            self.component_end()
        elif self.state is ParserState.NAMED_COMPONENT_OPEN:
            opened = self.current.startLine
            raise StateError(
                f"Unterminated component {self.current.name!r} at end of document",
                path=self.document.path,
                lineNumber=opened.line_number if opened else self.line_number,
                line=opened.line if opened else None,
            )

    def error(self, message: str) -> None:
        """
        Report a lifecycle violation at the current line

        Raises:
            StateError: Always (this is an error reporting function)
        """
        raise StateError(message, path=self.document.path, lineNumber=self.line_number)
