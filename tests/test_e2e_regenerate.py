"""
End-to-end regeneration tests

Tests the full cycle: source file -> Parser -> scripts -> Renderer -> writer,
through the regenerate_inPlace / regenerate_toOutput entry points.
"""

import pytest

from regenerate.lib.regenerator import regenerate_inPlace, regenerate_toOutput
from regenerate.lib.errors import ChangeDetectedError, ExecutionError, PathError, StateError
from regenerate.lib.shapes import ShapeRegistry
from regenerate.models.page import PageState


PAGE = """<html>
<head>
<!-- [script
page["title"] = page["baseFileName"].rsplit(".", 1)[0].title()
script] -->
<title>
<!-- [title] -->
</title>
</head>
<body>
<p>Static content</p>
</body>
</html>
"""

REGENERATED = """<html>
<head>
<!-- [script
page["title"] = page["baseFileName"].rsplit(".", 1)[0].title()
script] -->
<title>
<!-- [title -->
About
<!-- title] -->
</title>
</head>
<body>
<p>Static content</p>
</body>
</html>
"""


class TestInPlace:
    """Regenerating a file over itself"""

    def test_regenerate_in_place(self, tmp_path):
        source = tmp_path / "about.html"
        source.write_text(PAGE)

        result = regenerate_inPlace(source)

        assert source.read_text() == REGENERATED
        assert (tmp_path / "about.html~").read_text() == PAGE
        assert result.scriptCount == 1
        assert result.output == source

    def test_second_run_is_fixpoint(self, tmp_path):
        """A regenerated page regenerates to itself"""
        source = tmp_path / "about.html"
        source.write_text(PAGE)

        regenerate_inPlace(source)
        regenerate_inPlace(source, checkNoChanges=True)

        assert source.read_text() == REGENERATED
        assert (tmp_path / "about.html~").read_text() == REGENERATED

    def test_script_failure_writes_nothing(self, tmp_path):
        source = tmp_path / "page.html"
        original = "<!-- [script\nraise ValueError('no')\nscript] -->\n"
        source.write_text(original)

        with pytest.raises(ExecutionError):
            regenerate_inPlace(source)

        assert source.read_text() == original
        assert not (tmp_path / "page.html~").exists()

    def test_parse_failure_writes_nothing(self, tmp_path):
        source = tmp_path / "page.html"
        original = "<!-- [script\nx = 1\n"
        source.write_text(original)

        with pytest.raises(StateError, match="Unterminated"):
            regenerate_inPlace(source)

        assert source.read_text() == original
        assert not (tmp_path / "page.html~").exists()

    def test_unencodable_result_writes_nothing(self, tmp_path):
        """A slot value the output encoding cannot hold leaves the source alone"""
        source = tmp_path / "page.html"
        original = "<!-- [script\npage['title'] = '\\ud800'\nscript] -->\n<!-- [title] -->\n"
        source.write_text(original)

        with pytest.raises(PathError):
            regenerate_inPlace(source)

        assert source.read_text() == original
        assert not (tmp_path / "page.html~").exists()


class TestToOutput:
    """Regenerating into a separate output tree"""

    def test_output_tree(self, tmp_path):
        source = tmp_path / "site" / "about.html"
        source.parent.mkdir()
        source.write_text(PAGE)
        output = tmp_path / "build" / "about.html"

        result = regenerate_toOutput(source, output)

        assert output.read_text() == REGENERATED
        assert source.read_text() == PAGE
        assert result.componentCount == 5

    def test_published_output(self, tmp_path):
        source = tmp_path / "about.html"
        source.write_text(PAGE)
        output = tmp_path / "public" / "about.html"

        regenerate_toOutput(source, output, showSource=False)

        assert output.read_text() == (
            "<html>\n<head>\n<title>\nAbout\n</title>\n</head>\n"
            "<body>\n<p>Static content</p>\n</body>\n</html>\n"
        )

    def test_custom_executor(self, tmp_path):
        source = tmp_path / "page.html"
        source.write_text("<!-- [script\nanything\nscript] -->\n<!-- [title] -->\n")
        output = tmp_path / "out.html"

        def executor(text, lineNumber, page):
            page["title"] = f"line {lineNumber}"

        regenerate_toOutput(source, output, executor=executor)
        assert "<!-- [title -->\nline 2\n<!-- title] -->\n" in output.read_text()

    def test_custom_shape(self, tmp_path):
        class Article(PageState):
            defaults = {"byline": "Staff"}

        source = tmp_path / "news.html"
        source.write_text("<!-- [class Article] -->\n<!-- [script\npage['headline'] = page['byline']\nscript] -->\n<!-- [headline] -->\n")
        output = tmp_path / "out" / "news.html"

        regenerate_toOutput(source, output, shapes=ShapeRegistry({"Article": Article}))
        assert output.read_text().endswith("<!-- [headline -->\nStaff\n<!-- headline] -->\n")


class TestChangeDetection:
    """Verification against the previous output (scenario: three runs)"""

    def test_three_runs(self, tmp_path):
        source = tmp_path / "about.html"
        source.write_text(PAGE)
        output = tmp_path / "build" / "about.html"

        # First run establishes the output
        regenerate_toOutput(source, output)

        # Second run: byte-identical, no error and no side file
        regenerate_toOutput(source, output, checkNoChanges=True)
        assert not (tmp_path / "build" / "about.html.new").exists()

        # Third run after the previous output was edited by hand
        edited = REGENERATED.replace("About", "About us")
        output.write_text(edited)
        with pytest.raises(ChangeDetectedError):
            regenerate_toOutput(source, output, checkNoChanges=True)

        assert output.read_text() == edited
        assert (tmp_path / "build" / "about.html.new").read_text() == REGENERATED
