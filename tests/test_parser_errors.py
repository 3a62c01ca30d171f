"""
Parser error tests - lifecycle violations

Tests nesting, unmatched closes, name mismatches, slot-kind close markers,
unterminated components and error location reporting.
"""

from pathlib import Path

import pytest

from regenerate.lib.parser import Parser
from regenerate.lib.errors import GrammarError, PathError, StateError
from regenerate.lib.shapes import ShapeRegistry
from regenerate.models.page import PageState


def parse(source, path="/site/page.html", shapes=None):
    return Parser(source, path, shapes=shapes).parse()


class TestStateErrors:
    """Component state machine violations"""

    def test_nested_open(self):
        """Opening a component inside another is not permitted"""
        with pytest.raises(StateError, match="Nested open not permitted"):
            parse("<!-- [title -->\n<!-- [subtitle] -->\n<!-- title] -->\n")

    def test_close_with_nothing_open(self):
        with pytest.raises(StateError, match="nothing open"):
            parse("text\n<!-- title] -->\n")

    def test_name_mismatch(self):
        """Close name must equal open name"""
        with pytest.raises(StateError, match="doesn't match"):
            parse("<!-- [title -->\nHello\n<!-- heading] -->\n")

    def test_slot_name_case_matters(self):
        with pytest.raises(StateError, match="doesn't match"):
            parse("<!-- [title -->\nHello\n<!-- Title] -->\n")

    def test_script_closed_by_slot_name(self):
        with pytest.raises(StateError, match="doesn't match"):
            parse("<!-- [script\nx = 1\nx] -->\n")

    def test_rendered_slot_close_needs_comment_open(self):
        with pytest.raises(StateError, match="does not have a comment start"):
            parse("<!-- [title -->\nHello\ntitle] -->\n")

    def test_comment_only_close_rejects_comment_open(self):
        with pytest.raises(StateError, match="unexpected comment start"):
            parse("<!-- [summary\nnotes\n<!-- summary] -->\n")

    def test_unterminated_script(self):
        """End of file while a script is open"""
        with pytest.raises(StateError, match="Unterminated component"):
            parse("<!-- [script\npage['x'] = 'y'\n")

    def test_unterminated_slot(self):
        with pytest.raises(StateError, match="Unterminated component 'title'"):
            parse("<!-- [title -->\nHello\n")

    def test_unknown_shape(self):
        with pytest.raises(GrammarError, match="Unknown page shape 'Missing'"):
            parse("<!-- [class Missing] -->\n")


class TestErrorLocation:
    """Errors identify file, line number and line text"""

    def test_state_error_location(self):
        with pytest.raises(StateError) as excinfo:
            parse("a\nb\n<!-- title] -->\n", path="/site/page.html")

        error = excinfo.value
        assert error.path == Path("/site/page.html")
        assert error.lineNumber == 3
        assert error.line == "<!-- title] -->"
        assert str(error).startswith("/site/page.html:3: ")

    def test_grammar_error_location(self):
        with pytest.raises(GrammarError) as excinfo:
            parse("a\n<!-- [script] -->\n", path="/site/page.html")

        assert excinfo.value.path == Path("/site/page.html")
        assert excinfo.value.lineNumber == 2

    def test_unterminated_points_at_opening_line(self):
        with pytest.raises(StateError) as excinfo:
            parse("intro\n<!-- [script\nx = 1\n")

        assert excinfo.value.lineNumber == 2
        assert excinfo.value.line == "<!-- [script"

    def test_unknown_shape_location(self):
        with pytest.raises(GrammarError) as excinfo:
            parse("\n<!-- [class Missing] -->\n")
        assert excinfo.value.lineNumber == 2


class TestFileParse:
    """Reading documents from disk"""

    def test_missing_file(self, tmp_path):
        with pytest.raises(PathError):
            Parser.file_parse(tmp_path / "missing.html")

    def test_crlf_file(self, tmp_path):
        source = tmp_path / "page.html"
        source.write_bytes(b"<!-- [title -->\r\nHello\r\n<!-- title] -->\r\n")

        document = Parser.file_parse(source)
        assert document.slot_get("title") == "Hello"

    def test_undecodable_file(self, tmp_path):
        """Bytes that are not valid in the configured encoding name the file"""
        source = tmp_path / "page.html"
        source.write_bytes(b"<p>caf\xe9</p>\n")

        with pytest.raises(PathError) as excinfo:
            Parser.file_parse(source)
        assert excinfo.value.path == source
        assert "not valid" in str(excinfo.value)


class TestShapes:
    """Closed registry of page-state shapes"""

    class Article(PageState):
        defaults = {"author": "Staff"}

    def test_custom_shape(self):
        shapes = ShapeRegistry({"Article": self.Article})
        document = parse("<!-- [class Article] -->\n", shapes=shapes)

        assert isinstance(document.pageState, self.Article)
        assert document.slot_get("author") == "Staff"
        assert document.slot_get("baseFileName") == "page.html"

    def test_registry_is_read_only(self):
        shapes = ShapeRegistry()
        with pytest.raises(TypeError):
            shapes.specs["Other"] = PageState

    def test_registry_rejects_non_shapes(self):
        with pytest.raises(TypeError):
            ShapeRegistry({"Bad": dict})

    def test_names_list(self):
        shapes = ShapeRegistry({"Article": self.Article})
        assert shapes.names_list() == ["Article", "PageState"]

    def test_registry_rejects_builtin_defaults(self):
        class Renamed(PageState):
            defaults = {"fileName": "/elsewhere.html", "author": "Staff"}

        with pytest.raises(ValueError, match="fileName"):
            ShapeRegistry({"Renamed": Renamed})

    def test_builtins_win_over_defaults(self):
        """Built-ins describe the real source even if a subclass sets them"""
        class Renamed(PageState):
            defaults = {"baseFileName": "other.html", "author": "Staff"}

        page = Renamed(Path("/site/page.html"))
        assert page["baseFileName"] == "page.html"
        assert page["fileName"] == str(Path("/site/page.html").absolute())
        assert page["author"] == "Staff"
