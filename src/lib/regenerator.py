"""
Regeneration entry points used by traversal/orchestration layers

Each call runs one strictly sequential cycle for one document:

    parse  ->  execute scripts (in order)  ->  render  ->  protected write

Any error aborts the cycle. Parse and script errors happen before anything
is written; write errors leave the backup-protected previous version.
"""

from pathlib import Path
from typing import Optional, Union

from ..config import appsettings
from ..models.results import RegenerateResult
from .document import Document
from .log import LOG
from .parser import Parser
from .renderer import Renderer
from .scripts import PythonScriptExecutor, ScriptExecutor
from .shapes import ShapeRegistry
from .writer import outputFile_write


def document_prepare(
    sourcePath: Union[str, Path],
    executor: Optional[ScriptExecutor] = None,
    shapes: Optional[ShapeRegistry] = None,
) -> Document:
    """
    Parse a document and run its scripts.

    Returns:
        Document whose page state reflects every script block
    """
    document = Parser.file_parse(sourcePath, shapes=shapes)
    if executor is None:
        executor = PythonScriptExecutor()
    if document.scripts:
        LOG(f"Executing {len(document.scripts)} script components in {document.path.name} ...", level=1)
    document.scripts_execute(executor)
    return document


def regenerate_toOutput(
    sourcePath: Union[str, Path],
    outputPath: Union[str, Path],
    checkNoChanges: Optional[bool] = None,
    executor: Optional[ScriptExecutor] = None,
    shapes: Optional[ShapeRegistry] = None,
    showSource: bool = True,
) -> RegenerateResult:
    """
    Regenerate a source document into a separate output file.

    Args:
        sourcePath: Document to parse
        outputPath: File to write (may equal sourcePath)
        checkNoChanges: Fail if the output differs from its previous
                        version (defaults to the configured setting)
        executor: Script executor (defaults to PythonScriptExecutor)
        shapes: Page-state shape registry (defaults to built-ins only)
        showSource: Keep directive syntax in the output

    Returns:
        RegenerateResult for the document

    Raises:
        GrammarError, StateError, ExecutionError, ChangeDetectedError, PathError
    """
    if checkNoChanges is None:
        checkNoChanges = appsettings.check_no_changes

    document = document_prepare(sourcePath, executor=executor, shapes=shapes)
    text = Renderer(document, showSource=showSource).render()
    write = outputFile_write(outputPath, text, checkNoChanges=checkNoChanges)

    return RegenerateResult(
        source=document.path,
        output=write.target,
        componentCount=len(document.components),
        scriptCount=len(document.scripts),
        write=write,
    )


def regenerate_inPlace(
    path: Union[str, Path],
    checkNoChanges: Optional[bool] = None,
    executor: Optional[ScriptExecutor] = None,
    shapes: Optional[ShapeRegistry] = None,
) -> RegenerateResult:
    """
    Regenerate a document over itself, keeping the previous version as "<path>~".
    """
    LOG(f"Regenerating {path} in place", level=2)
    return regenerate_toOutput(
        path, path, checkNoChanges=checkNoChanges, executor=executor, shapes=shapes
    )
