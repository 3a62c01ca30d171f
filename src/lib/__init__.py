"""
regenerate - In-place static page regeneration

Parses HTML/XML documents containing comment directives, runs their script
blocks against page state, and writes them back with the directives intact.
"""

__version__ = "0.3.0"
__author__ = "regenerate contributors"

from .parser import Parser
from .document import Document
from .renderer import Renderer, document_render
from .shapes import ShapeRegistry
from .scripts import PythonScriptExecutor
from .writer import outputFile_write
from .regenerator import regenerate_inPlace, regenerate_toOutput
from .errors import (
    RegenerateError,
    ParseError,
    GrammarError,
    StateError,
    ExecutionError,
    ChangeDetectedError,
    PathError,
)
from .log import LOG, state_connectToLogger

__all__ = [
    "Parser",
    "Document",
    "Renderer",
    "document_render",
    "ShapeRegistry",
    "PythonScriptExecutor",
    "outputFile_write",
    "regenerate_inPlace",
    "regenerate_toOutput",
    "RegenerateError",
    "ParseError",
    "GrammarError",
    "StateError",
    "ExecutionError",
    "ChangeDetectedError",
    "PathError",
    "LOG",
    "state_connectToLogger",
    "__version__",
]
