"""
Registry of page-state shapes

Maps the identifier written in "<!-- [class Name] -->" to a PageState
subclass. The table is closed: it is fixed when the registry is built and
never grows afterwards, and identifiers are never resolved by reflection.
"""

from pathlib import Path
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional, Type, Union

from ..models.page import PageState
from ..models.directives import BUILTIN_SLOTS
from .errors import GrammarError


DEFAULT_SHAPE = 'PageState'

BUILTIN_SHAPES: Mapping[str, Type[PageState]] = MappingProxyType({
    DEFAULT_SHAPE: PageState,
})


class ShapeRegistry:
    """
    Closed identifier -> shape table

    Host applications pass their own shapes at construction time:

        class Article(PageState):
            defaults = {'author': 'Staff'}

        shapes = ShapeRegistry({'Article': Article})
        shapes.shape_make('Article', Path('news.html'))
    """

    def __init__(self, shapes: Optional[Mapping[str, Type[PageState]]] = None) -> None:
        table: Dict[str, Type[PageState]] = dict(BUILTIN_SHAPES)
        for identifier, shape in (shapes or {}).items():
            if not (isinstance(shape, type) and issubclass(shape, PageState)):
                raise TypeError(f"Shape {identifier!r} must be a PageState subclass, got {shape!r}")
            overlap = BUILTIN_SLOTS.intersection(shape.defaults)
            if overlap:
                raise ValueError(
                    f"Shape {identifier!r} defaults cannot set built-in slots: {', '.join(sorted(overlap))}"
                )
            table[identifier] = shape
        self.specs: Mapping[str, Type[PageState]] = MappingProxyType(table)

    def get(self, identifier: str) -> Optional[Type[PageState]]:
        return self.specs.get(identifier)

    def shape_make(self, identifier: str, path: Union[str, Path]) -> PageState:
        """
        Build a fresh page state of the named shape.

        An unknown identifier is a bad argument on the class directive, so it
        is reported as a GrammarError rather than a lifecycle violation.

        Raises:
            GrammarError: If no shape is registered under the identifier
        """
        shape = self.get(identifier)
        if shape is None:
            raise GrammarError(
                f"Unknown page shape {identifier!r} (known: {', '.join(self.names_list())})"
            )
        return shape(path)

    def default_make(self, path: Union[str, Path]) -> PageState:
        return self.shape_make(DEFAULT_SHAPE, path)

    def names_list(self) -> List[str]:
        return sorted(self.specs)

    def __contains__(self, identifier: object) -> bool:
        return identifier in self.specs
