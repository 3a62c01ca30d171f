"""
Page state: the named-slot store that scripts read and mutate

A PageState is an explicit ordered mapping from slot name to text (or None).
It is the execution context handed to script executors, and the store that
data-slot components write on close and rendered slots read at render time.

Shapes are PageState subclasses. Selecting a shape with
"<!-- [class Name] -->" replaces the page state with a fresh instance: the
built-in slots are reinstalled, any previously set slots are discarded.
"""

from pathlib import Path
from typing import ClassVar, Dict, Iterator, List, Optional, Union


class PageState:
    """
    Ordered named-slot store for one document

    Built-in slots:
        fileName: Absolute path of the source document
        fileDir: Directory containing the source document
        baseFileName: Base name of the source document

    Subclasses may declare `defaults` to pre-populate shape-specific slots.

    Example:
        >>> page = PageState(Path("/site/index.html"))
        >>> page["baseFileName"]
        'index.html'
        >>> page.set("title", "Home")
        >>> page.get("title")
        'Home'
    """

    defaults: ClassVar[Dict[str, str]] = {}

    def __init__(self, path: Union[str, Path]) -> None:
        self.path = Path(path).absolute()
        self.slots: Dict[str, Optional[str]] = {}
        for name, value in self.defaults.items():
            self.slots[name] = value
        self.builtins_install()

    def builtins_install(self) -> None:
        """Install the three built-in slots derived from the source path"""
        self.slots['fileName'] = str(self.path)
        self.slots['fileDir'] = str(self.path.parent)
        self.slots['baseFileName'] = self.path.name

    def get(self, name: str, default: Optional[str] = None) -> Optional[str]:
        return self.slots.get(name, default)

    def set(self, name: str, value: Optional[str]) -> None:
        self.slots[name] = value

    def slots_list(self) -> List[str]:
        """Slot names in insertion order"""
        return list(self.slots)

    def __getitem__(self, name: str) -> Optional[str]:
        return self.slots[name]

    def __setitem__(self, name: str, value: Optional[str]) -> None:
        self.set(name, value)

    def __contains__(self, name: object) -> bool:
        return name in self.slots

    def __iter__(self) -> Iterator[str]:
        return iter(self.slots)

    def __len__(self) -> int:
        return len(self.slots)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(path='{self.path}', slots={len(self.slots)})"
