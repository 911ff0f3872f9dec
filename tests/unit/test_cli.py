"""
Integration tests for CLI commands.

Tests the basic functionality of CLI commands and error handling.
"""

from pathlib import Path

import pytest
from typer.testing import CliRunner

from treepack.cli import app

runner = CliRunner()


@pytest.fixture
def project(tmp_path: Path) -> Path:
    root = tmp_path / "proj"
    (root / "src").mkdir(parents=True)
    (root / "node_modules" / "pkg").mkdir(parents=True)
    (root / "src" / "index.ts").write_text(
        'const a = 1; // comment\nconst s = "// not a comment";\n', encoding="utf-8"
    )
    (root / "node_modules" / "pkg" / "index.js").write_text("module.exports = {};", encoding="utf-8")
    (root / ".env").write_text("KEY=1", encoding="utf-8")
    (root / "blacklist.txt").write_text("node_modules\n", encoding="utf-8")
    return root


class TestCLIHelp:
    """Test CLI help and usage information."""

    def test_main_help(self):
        """Main help should display available commands."""
        result = runner.invoke(app, ["--help"])

        assert result.exit_code == 0
        assert "scan" in result.stdout
        assert "bundle" in result.stdout
        assert "config" in result.stdout

    def test_scan_help(self):
        result = runner.invoke(app, ["scan", "--help"])

        assert result.exit_code == 0
        assert "--rules" in result.stdout
        assert "--env" in result.stdout

    def test_bundle_help(self):
        result = runner.invoke(app, ["bundle", "--help"])

        assert result.exit_code == 0
        assert "--files-list" in result.stdout
        assert "--root-folder" in result.stdout


class TestScanCommand:
    def test_scan_writes_manifest(self, project):
        result = runner.invoke(app, ["scan", str(project)])

        assert result.exit_code == 0, result.output
        assert "Scan Complete" in result.output

        output = (project / "project_files.txt").read_text(encoding="utf-8")
        assert "src/index.ts\nconst a = 1; // comment\n" in output
        assert ".env\n[sensitive config file - content skipped]\n\n" in output
        assert "pkg/index.js" not in output
        assert "project_files.txt" not in output

    def test_scan_with_env_and_stripping(self, project, tmp_path):
        out = tmp_path / "manifest.txt"

        result = runner.invoke(
            app, ["scan", str(project), "-o", str(out), "--env", "--strip-comments"]
        )

        assert result.exit_code == 0, result.output
        output = out.read_text(encoding="utf-8")
        assert "// comment" not in output
        assert 'const s = "// not a comment";' in output
        assert "### .env file content ###\nKEY=1\n### End of .env file ###" in output

    def test_extra_exclude_option(self, project):
        result = runner.invoke(app, ["scan", str(project), "-x", "src"])

        assert result.exit_code == 0, result.output
        output = (project / "project_files.txt").read_text(encoding="utf-8")
        assert "index.ts" not in output

    def test_missing_directory_exits_with_error(self, tmp_path):
        result = runner.invoke(app, ["scan", str(tmp_path / "missing")])

        assert result.exit_code == 1
        assert "Error" in result.output

    def test_explicit_missing_rules_file_exits_with_error(self, project, tmp_path):
        result = runner.invoke(app, ["scan", str(project), "--rules", str(tmp_path / "nope.txt")])

        assert result.exit_code == 1
        assert not (project / "project_files.txt").exists()

    def test_explicit_rules_path_that_is_a_directory_exits_with_error(self, project):
        (project / "rulesdir").mkdir()

        result = runner.invoke(app, ["scan", str(project), "--rules", str(project / "rulesdir")])

        assert result.exit_code == 1
        assert "Cannot read rules file" in result.output
        assert not (project / "project_files.txt").exists()

    def test_explicit_undecodable_rules_file_exits_with_error(self, project):
        (project / "blacklist.txt").write_bytes(b"\xff\xfe node_modules")

        result = runner.invoke(app, ["scan", str(project), "--rules", str(project / "blacklist.txt")])

        assert result.exit_code == 1
        assert "Invalid UTF-8" in result.output
        assert not (project / "project_files.txt").exists()

    def test_output_name_does_not_exclude_same_named_directories(self, project):
        (project / "src" / "out").mkdir()
        (project / "src" / "out" / "keep.txt").write_text("kept", encoding="utf-8")
        out = project / "out"

        result = runner.invoke(app, ["scan", str(project), "-o", str(out)])

        assert result.exit_code == 0, result.output
        output = out.read_text(encoding="utf-8")
        assert "src/out/keep.txt\nkept\n\n" in output
        assert "out\n" not in output.replace("src/out\n", "")

    def test_missing_default_rules_file_is_not_fatal(self, project):
        (project / "blacklist.txt").unlink()

        result = runner.invoke(app, ["scan", str(project)])

        assert result.exit_code == 0, result.output
        output = (project / "project_files.txt").read_text(encoding="utf-8")
        assert "node_modules/pkg/index.js" in output

    def test_config_file_options(self, project, tmp_path):
        config = tmp_path / "treepack.yaml"
        config.write_text(
            "scan:\n  output_file_name: bundle.txt\n  extra_rules: [src]\n", encoding="utf-8"
        )

        result = runner.invoke(app, ["scan", str(project), "--config", str(config)])

        assert result.exit_code == 0, result.output
        output = (project / "bundle.txt").read_text(encoding="utf-8")
        assert "index.ts" not in output

    def test_invalid_config_file_exits_with_error(self, project, tmp_path):
        config = tmp_path / "treepack.yaml"
        config.write_text("scan:\n  unknown_key: 1\n", encoding="utf-8")

        result = runner.invoke(app, ["scan", str(project), "--config", str(config)])

        assert result.exit_code == 1


class TestBundleCommand:
    def test_bundle_listed_files(self, project, monkeypatch):
        monkeypatch.chdir(project)
        (project / "files-list.txt").write_text("src/index.ts\nmissing.ts\n", encoding="utf-8")

        result = runner.invoke(app, ["bundle"])

        assert result.exit_code == 0, result.output
        assert "Bundle Complete" in result.output
        content = (project / "prompt.txt").read_text(encoding="utf-8")
        assert content.startswith("src/index.ts:\nconst a = 1; \n")
        assert 'const s = "// not a comment";' in content

    def test_bundle_keep_comments_and_output_file(self, project):
        (project / "files-list.txt").write_text("src/index.ts\n", encoding="utf-8")

        result = runner.invoke(
            app,
            ["bundle", "--base-dir", str(project), "--keep-comments", "-o", "out.txt"],
        )

        assert result.exit_code == 0, result.output
        assert "// comment" in (project / "out.txt").read_text(encoding="utf-8")

    def test_bundle_with_root_folder(self, project):
        base = project.parent
        (project / "files-list.txt").write_text("proj/src/index.ts\n", encoding="utf-8")

        result = runner.invoke(
            app, ["bundle", "--base-dir", str(base), "--root-folder", "proj"]
        )

        assert result.exit_code == 0, result.output
        content = (base / "prompt.txt").read_text(encoding="utf-8")
        assert content.startswith("src/index.ts:\n")

    def test_bundle_exclude_default(self, project):
        (project / "README.md").write_text("# readme", encoding="utf-8")
        (project / "files-list.txt").write_text("README.md\nsrc/index.ts\n", encoding="utf-8")

        result = runner.invoke(app, ["bundle", "--base-dir", str(project), "--exclude-default"])

        assert result.exit_code == 0, result.output
        content = (project / "prompt.txt").read_text(encoding="utf-8")
        assert "README.md" not in content
        assert "src/index.ts:" in content

    def test_missing_files_list_exits_with_error(self, tmp_path):
        result = runner.invoke(
            app, ["bundle", "--base-dir", str(tmp_path), "--root-folder", "proj"]
        )

        assert result.exit_code == 1
        assert "Searched in" in result.output
        assert "--root-folder" in result.output

    def test_undecodable_files_list_exits_with_error(self, project):
        (project / "files-list.txt").write_bytes(b"\xff\xfe bad")

        result = runner.invoke(app, ["bundle", "--base-dir", str(project)])

        assert result.exit_code == 1
        assert isinstance(result.exception, SystemExit)
        assert "Invalid UTF-8" in result.output
        assert not (project / "prompt.txt").exists()


class TestConfigCommand:
    def test_prints_effective_config(self):
        result = runner.invoke(app, ["config"])

        assert result.exit_code == 0
        assert "rules_file_name" in result.stdout
        assert "files_list" in result.stdout

    def test_missing_config_file(self, tmp_path):
        result = runner.invoke(app, ["config", "--config", str(tmp_path / "missing.yaml")])

        assert result.exit_code == 1
