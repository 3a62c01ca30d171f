"""
Error taxonomy for regenerate

Every fatal error carries the document path and, where it is known, the
line number and line text that triggered it. None of these are retried;
each aborts the regeneration of one document and is surfaced to the caller.

    RegenerateError
    ├── ParseError
    │   ├── GrammarError      directive-shaped line fails validation
    │   └── StateError        lifecycle violation (nesting, mismatch, EOF)
    ├── ExecutionError        a script block failed against page state
    ├── ChangeDetectedError   output differs from the previous version
    └── PathError             directory/backup/permission problems
"""

from pathlib import Path
from typing import Optional, Union


class RegenerateError(Exception):
    """Base class for all regeneration failures"""

    def __init__(
        self,
        message: str,
        path: Optional[Union[str, Path]] = None,
        lineNumber: Optional[int] = None,
        line: Optional[str] = None,
    ) -> None:
        self.message = message
        self.path = Path(path) if path is not None else None
        self.lineNumber = lineNumber
        self.line = line
        super().__init__(self.message_format())

    def message_format(self) -> str:
        """
        Build the reported message from path, line number and line text.

        Example:
            page.html:12: nested open not permitted
              <!-- [script
        """
        location = ""
        if self.path is not None:
            location = str(self.path)
            if self.lineNumber:
                location += f":{self.lineNumber}"
            location += ": "
        elif self.lineNumber:
            location = f"line {self.lineNumber}: "

        text = f"{location}{self.message}"
        if self.line is not None:
            text += f"\n  {self.line}"
        return text

    def location_attach(
        self,
        path: Union[str, Path],
        lineNumber: Optional[int] = None,
        line: Optional[str] = None,
    ) -> "RegenerateError":
        """Fill in location details on an error raised below the document level"""
        if self.path is None:
            self.path = Path(path)
        if self.lineNumber is None:
            self.lineNumber = lineNumber
        if self.line is None:
            self.line = line
        self.args = (self.message_format(),)
        return self


class ParseError(RegenerateError):
    """A document could not be split into components"""
    pass


class GrammarError(ParseError):
    """A directive-shaped line failed structural validation"""
    pass


class StateError(ParseError):
    """Component lifecycle violation: nested open, unmatched close, name mismatch, unterminated component"""
    pass


class ExecutionError(RegenerateError):
    """A script block failed when run against page state"""
    pass


class ChangeDetectedError(RegenerateError):
    """
    Rendered output differs from the previous version of the target.

    Attributes:
        offset: Byte offset of the first difference
        context: Text surrounding the first difference, old and new
        newPath: Where the new (rejected) content was moved
    """

    def __init__(
        self,
        message: str,
        path: Optional[Union[str, Path]] = None,
        offset: int = 0,
        context: str = "",
        newPath: Optional[Path] = None,
    ) -> None:
        self.offset = offset
        self.context = context
        self.newPath = newPath
        super().__init__(message, path=path)


class PathError(RegenerateError):
    """Missing or invalid directories, missing backup file, permission failures"""
    pass
