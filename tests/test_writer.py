"""
File-safety writer tests

Tests backup rotation, directory creation, verification mode and rollback.
"""

import pytest

from regenerate.lib.writer import difference_find, outputFile_write
from regenerate.lib.errors import ChangeDetectedError, PathError


class TestBackupRotation:
    """Exactly one backup generation is kept"""

    def test_first_write_has_no_backup(self, tmp_path):
        target = tmp_path / "page.html"
        result = outputFile_write(target, "one\n")

        assert target.read_text() == "one\n"
        assert result.backup is None
        assert not (tmp_path / "page.html~").exists()

    def test_previous_version_becomes_backup(self, tmp_path):
        target = tmp_path / "page.html"
        outputFile_write(target, "one\n")
        result = outputFile_write(target, "two\n")

        assert target.read_text() == "two\n"
        assert result.backup == tmp_path / "page.html~"
        assert result.backup.read_text() == "one\n"

    def test_n_writes_keep_one_backup(self, tmp_path):
        """After N writes the single backup holds generation N-1"""
        target = tmp_path / "page.html"
        for n in range(1, 6):
            outputFile_write(target, f"generation {n}\n")

        backups = sorted(p.name for p in tmp_path.iterdir() if p.name != "page.html")
        assert backups == ["page.html~"]
        assert (tmp_path / "page.html~").read_text() == "generation 4\n"
        assert target.read_text() == "generation 5\n"

    def test_text_written_verbatim(self, tmp_path):
        """Line terminators are written as rendered"""
        target = tmp_path / "page.html"
        outputFile_write(target, "a\nb\n")
        assert target.read_bytes() == b"a\nb\n"

    def test_unencodable_text_keeps_target(self, tmp_path):
        """Text that cannot be encoded fails before the backup rotation"""
        target = tmp_path / "page.html"
        target.write_text("one\n")

        with pytest.raises(PathError, match="cannot be encoded") as excinfo:
            outputFile_write(target, "<p>\ud800</p>\n")

        assert excinfo.value.path == target
        assert target.read_text() == "one\n"
        assert not (tmp_path / "page.html~").exists()


class TestDirectories:
    """Ancestor directories are created as needed"""

    def test_missing_parents_created(self, tmp_path):
        target = tmp_path / "out" / "deep" / "page.html"
        outputFile_write(target, "x\n")
        assert target.read_text() == "x\n"

    def test_file_in_the_way(self, tmp_path):
        """A non-directory ancestor is fatal"""
        (tmp_path / "out").write_text("not a directory")
        with pytest.raises(PathError, match="is not a directory"):
            outputFile_write(tmp_path / "out" / "page.html", "x\n")

    def test_target_is_directory(self, tmp_path):
        (tmp_path / "page.html").mkdir()
        with pytest.raises(PathError, match="is a directory"):
            outputFile_write(tmp_path / "page.html", "x\n")


class TestVerification:
    """checkNoChanges compares new output with the previous version"""

    def test_identical_output_passes(self, tmp_path):
        target = tmp_path / "page.html"
        outputFile_write(target, "same\n")
        result = outputFile_write(target, "same\n", checkNoChanges=True)

        assert result.verified
        assert target.read_text() == "same\n"
        assert not (tmp_path / "page.html.new").exists()

    def test_change_detected_and_rolled_back(self, tmp_path):
        target = tmp_path / "page.html"
        outputFile_write(target, "<h1>Hello</h1>\n")

        with pytest.raises(ChangeDetectedError) as excinfo:
            outputFile_write(target, "<h1>Hallo</h1>\n", checkNoChanges=True)

        error = excinfo.value
        assert error.offset == 5
        assert "Hello" in error.context and "Hallo" in error.context
        assert error.newPath == tmp_path / "page.html.new"
        assert target.read_text() == "<h1>Hello</h1>\n"
        assert (tmp_path / "page.html.new").read_text() == "<h1>Hallo</h1>\n"

    def test_missing_previous_version(self, tmp_path):
        """Nothing to compare against: refuse before writing"""
        target = tmp_path / "page.html"
        with pytest.raises(PathError, match="missing"):
            outputFile_write(target, "x\n", checkNoChanges=True)
        assert not target.exists()


class TestDifferenceFind:
    """Byte offset of the first difference"""

    def test_identical(self):
        assert difference_find(b"abc", b"abc") is None

    def test_middle(self):
        assert difference_find(b"abc", b"abd") == 2

    def test_prefix(self):
        assert difference_find(b"abc", b"abcdef") == 3

    def test_empty(self):
        assert difference_find(b"", b"x") == 0
