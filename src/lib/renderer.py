"""
Renderer for parsed documents

Concatenates, in document order, the rendered text of every component.

With showSource=True (the default) the output reproduces the directive
syntax, so it is itself a valid input to a later regeneration. With
showSource=False the output is the published page: directives, scripts and
comment-only slots are dropped and rendered slots contribute only their
current value.
"""

from typing import List

from .document import Document
from .log import LOG


class Renderer:
    """
    Renders a Document's component sequence to text

    Responsibilities:
    - Render every component, in order
    - Re-read rendered slot values from the current page state
    """

    def __init__(self, document: Document, showSource: bool = True) -> None:
        """
        Args:
            document: Parsed (and usually script-executed) document
            showSource: Keep directive syntax in the output
        """
        self.document = document
        self.showSource = showSource

    def parts_render(self) -> List[str]:
        return [component.render(self.showSource) for component in self.document.components]

    def render(self) -> str:
        """
        Render the whole document.

        Returns:
            Output text, one trailing line terminator per component line
        """
        text = ''.join(self.parts_render())
        LOG(
            f"Rendered {len(self.document.components)} components "
            f"({len(text)} characters, showSource={self.showSource})",
            level=3,
        )
        return text


def document_render(document: Document, showSource: bool = True) -> str:
    """Render a document in one call"""
    return Renderer(document, showSource=showSource).render()
