"""
Document: the component sequence and page state of one regeneration

A Document lives for one parse, execute, render cycle. It exclusively owns
its components, its queued scripts and its current PageState; nothing is
shared across documents.
"""

from pathlib import Path
from typing import List, Optional, Union, TYPE_CHECKING

from ..models.page import PageState
from ..models.parser import ComponentSummary
from .errors import ExecutionError, RegenerateError
from .log import LOG
from .shapes import ShapeRegistry

if TYPE_CHECKING:
    from .components import Component, Script
    from .scripts import ScriptExecutor


class Document:
    """
    Ordered component sequence plus page-scoped state

    Attributes:
        path: Absolute path of the source document
        components: Components in document order
        scripts: Script components queued for execution, in document order
        shapes: Registry consulted by class selectors
        pageState: Current page state (replaced by class selectors)
    """

    def __init__(self, path: Union[str, Path], shapes: Optional[ShapeRegistry] = None) -> None:
        self.path = Path(path).absolute()
        self.components: List["Component"] = []
        self.scripts: List["Script"] = []
        self.shapes = shapes if shapes is not None else ShapeRegistry()
        self.pageState: PageState = self.shapes.default_make(self.path)

    def component_add(self, component: "Component") -> None:
        component.document_attach(self)
        self.components.append(component)

    def script_enqueue(self, script: "Script") -> None:
        self.scripts.append(script)

    def pageState_swap(self, identifier: str) -> None:
        """Replace the page state with a fresh instance of the named shape"""
        LOG(f"Page state shape set to {identifier}", level=3)
        self.pageState = self.shapes.shape_make(identifier, self.path)

    def slot_set(self, name: str, value: Optional[str]) -> None:
        self.pageState.set(name, value)

    def slot_get(self, name: str) -> Optional[str]:
        return self.pageState.get(name)

    def scripts_execute(self, executor: "ScriptExecutor") -> int:
        """
        Run every queued script, in document order, against the page state.

        Args:
            executor: Callable (source, lineNumber, page) -> None | bool

        Returns:
            Number of scripts executed

        Raises:
            ExecutionError: On the first script that raises or returns False
        """
        for script in self.scripts:
            LOG(f"Executing script at {self.path.name}:{script.lineNumber}", level=2)
            try:
                result = executor(script.text, script.lineNumber, self.pageState)
            except RegenerateError as e:
                raise e.location_attach(self.path, script.lineNumber)
            except Exception as e:
                raise ExecutionError(
                    f"Script failed: {type(e).__name__}: {e}",
                    path=self.path,
                    lineNumber=script.lineNumber,
                ) from e
            if result is False:
                raise ExecutionError(
                    "Script reported failure", path=self.path, lineNumber=script.lineNumber
                )
        return len(self.scripts)

    def summary(self) -> List[ComponentSummary]:
        """Comparable description of the component sequence"""
        return [component.summary() for component in self.components]

    def __repr__(self) -> str:
        return f"Document(path='{self.path}', components={len(self.components)})"
