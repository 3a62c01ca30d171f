"""
regenerate - In-place static page regeneration

Documents keep their own generator: comment directives name data slots and
script blocks, and regenerating a page rewrites it with the same directives
and fresh slot values.
"""

__version__ = "0.3.0"
__author__ = "regenerate contributors"

from .lib import (
    Parser,
    Renderer,
    ShapeRegistry,
    regenerate_inPlace,
    regenerate_toOutput,
    LOG,
    state_connectToLogger,
)
from .models import PageState

__all__ = [
    "Parser",
    "Renderer",
    "ShapeRegistry",
    "PageState",
    "regenerate_inPlace",
    "regenerate_toOutput",
    "LOG",
    "state_connectToLogger",
    "__version__",
]
