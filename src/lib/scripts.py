"""
Script execution boundary

The engine never interprets script bodies itself. It hands each queued
script, in document order, to an executor:

    executor(source, lineNumber, page) -> None | bool

The executor reads and writes slots through the PageState it is given.
Raising, or returning False, marks the script as failed; the document then
reports an ExecutionError and nothing is written.

PythonScriptExecutor is the executor used when the host supplies none.
"""

import builtins
from typing import Any, Dict, Optional, Protocol

from ..models.page import PageState
from .log import LOG


class ScriptExecutor(Protocol):
    """Callable run once per script block"""

    def __call__(self, source: str, lineNumber: int, page: PageState) -> Optional[bool]:
        ...


class PythonScriptExecutor:
    """
    Run script blocks as Python with the page state bound to `page`

    Each block gets a fresh namespace. Blocks are compiled against the
    source document's path with their original line offset, so tracebacks
    point into the document.

    Example document:
        <!-- [script
        page["title"] = page["baseFileName"].rsplit(".", 1)[0].title()
        script] -->
        <!-- [title] -->
    """

    def __init__(self, namespace: Optional[Dict[str, Any]] = None) -> None:
        """
        Args:
            namespace: Extra names made available to every script block
        """
        self.namespace = dict(namespace or {})

    def __call__(self, source: str, lineNumber: int, page: PageState) -> Optional[bool]:
        filename = page.get('fileName') or '<document>'
        # Pad so the compiled code reports document line numbers
        padded = "\n" * max(lineNumber - 1, 0) + source
        code = compile(padded, filename, 'exec')

        scope: Dict[str, Any] = {
            '__builtins__': builtins,
            '__name__': '__regenerate__',
            '__file__': filename,
            **self.namespace,
            'page': page,
        }
        LOG(f"Executing script (line {lineNumber}) in {filename}", level=3)
        exec(code, scope)
        return True
