"""
Tests for file-list aggregation (bundle mode).
"""

import logging
from pathlib import Path

import pytest

from treepack.core.errors import FileListError, FileListNotFoundError
from treepack.core.file_list import (
    AggregationResult,
    FileListOptions,
    aggregate_file_list,
    read_file_list,
    write_bundle,
)


@pytest.fixture
def project(tmp_path: Path) -> Path:
    """A small project under tmp_path/myproject."""
    root = tmp_path / "myproject"
    (root / "src").mkdir(parents=True)
    (root / "db").mkdir()
    (root / "src" / "app.ts").write_text("const a = 1; // note\n", encoding="utf-8")
    (root / "src" / "app.spec.ts").write_text("it('works')\n", encoding="utf-8")
    (root / "db" / "init.sql").write_text("SELECT 1; -- seed\n", encoding="utf-8")
    (root / "README.md").write_text("# Readme\n", encoding="utf-8")
    return root


class TestReadFileList:
    def test_ignores_blanks_and_comments(self, tmp_path):
        list_path = tmp_path / "files-list.txt"
        list_path.write_text("# header\n\nsrc/a.ts\n  src\\b.ts  \n", encoding="utf-8")

        assert read_file_list(list_path) == ["src/a.ts", "src/b.ts"]

    def test_missing_list_raises_with_searched_path(self, tmp_path):
        missing = tmp_path / "nope.txt"

        with pytest.raises(FileListNotFoundError) as exc_info:
            read_file_list(missing)

        assert exc_info.value.searched_path == str(missing)
        assert isinstance(exc_info.value, FileNotFoundError)

    def test_undecodable_list_raises_with_searched_path(self, tmp_path):
        list_path = tmp_path / "files-list.txt"
        list_path.write_bytes(b"\xff\xfe bad")

        with pytest.raises(FileListError, match="Invalid UTF-8") as exc_info:
            read_file_list(list_path)

        assert exc_info.value.searched_path == str(list_path)

    def test_directory_in_place_of_list_raises(self, tmp_path):
        list_dir = tmp_path / "files-list.txt"
        list_dir.mkdir()

        with pytest.raises(FileListError, match="Cannot read file list"):
            read_file_list(list_dir)


class TestAggregation:
    def test_files_are_concatenated_in_list_order(self, project):
        options = FileListOptions(base_dir=project, strip_comments=False)

        result = aggregate_file_list(["src/app.ts", "db/init.sql"], options)

        assert result.processed == 2
        assert result.added_files == ["src/app.ts", "db/init.sql"]
        assert result.content == (
            "src/app.ts:\nconst a = 1; // note\n\n\n\n"
            "db/init.sql:\nSELECT 1; -- seed"
        )

    def test_comments_stripped_by_detected_language(self, project):
        options = FileListOptions(base_dir=project)

        result = aggregate_file_list(["src/app.ts", "db/init.sql", "README.md"], options)

        assert "src/app.ts:\nconst a = 1; \n" in result.content
        assert "db/init.sql:\nSELECT 1; \n" in result.content
        assert "README.md:\n# Readme" in result.content

    def test_missing_file_counts_as_not_found(self, project, caplog):
        options = FileListOptions(base_dir=project)

        with caplog.at_level(logging.WARNING):
            result = aggregate_file_list(["src/app.ts", "src/gone.ts"], options)

        assert result.processed == 1
        assert result.skipped == 1
        assert result.not_found == 1
        assert any("does not exist" in r.message for r in caplog.records)

    def test_directories_skipped_by_default(self, project):
        result = aggregate_file_list(["src"], FileListOptions(base_dir=project))

        assert result.processed == 0
        assert result.skipped == 1
        assert result.not_found == 0
        assert result.content == ""

    def test_excluded_entries_use_path_filter_rules(self, project):
        options = FileListOptions(base_dir=project, rules=("*.spec.ts", "README.md"))

        result = aggregate_file_list(["src/app.ts", "src/app.spec.ts", "README.md"], options)

        assert result.processed == 1
        assert result.skipped == 2
        assert result.added_files == ["src/app.ts"]

    def test_absolute_entries(self, project, tmp_path):
        options = FileListOptions(base_dir=tmp_path, strip_comments=False)

        result = aggregate_file_list([str(project / "README.md")], options)

        assert result.processed == 1
        assert result.content.endswith("README.md:\n# Readme")

    def test_read_error_gives_empty_content(self, project, monkeypatch, caplog):
        def failing_read(self, *args, **kwargs):
            raise OSError("locked")

        monkeypatch.setattr(Path, "read_text", failing_read)

        with caplog.at_level(logging.ERROR):
            result = aggregate_file_list(
                ["README.md"], FileListOptions(base_dir=project, strip_comments=False)
            )

        assert result.processed == 1
        assert result.content == "README.md:"
        assert any("Error reading file" in r.message for r in caplog.records)


class TestRootFolder:
    def test_entries_found_under_root_folder(self, project):
        base = project.parent
        options = FileListOptions(base_dir=base, root_folder="myproject", strip_comments=False)

        result = aggregate_file_list(["src/app.ts"], options)

        assert result.processed == 1
        assert result.added_files == ["src/app.ts"]

    def test_display_path_trimmed_after_root_folder(self, project):
        base = project.parent
        options = FileListOptions(base_dir=base, root_folder="myproject", strip_comments=False)

        result = aggregate_file_list(["myproject/src/app.ts"], options)

        assert result.added_files == ["src/app.ts"]
        assert result.content.startswith("src/app.ts:\n")

    def test_root_folder_found_from_nested_base(self, project):
        nested = project.parent / "elsewhere" / "deeper"
        nested.mkdir(parents=True)
        options = FileListOptions(base_dir=nested, root_folder="myproject")

        result = aggregate_file_list(["db/init.sql"], options)

        assert result.processed == 1
        assert result.not_found == 0


class TestWriteBundle:
    def test_writes_content(self, tmp_path):
        result = AggregationResult(processed=1, content="a.txt:\nhello")

        output = write_bundle(result, tmp_path / "prompt.txt")

        assert output.read_text(encoding="utf-8") == "a.txt:\nhello"

    def test_overwrites_previous_output(self, tmp_path):
        target = tmp_path / "prompt.txt"
        target.write_text("old content that is longer", encoding="utf-8")

        write_bundle(AggregationResult(content="new"), target)

        assert target.read_text(encoding="utf-8") == "new"
