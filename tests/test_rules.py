"""
Tests for exclusion rule loading and merging.
"""

import logging

import pytest

from treepack.core.errors import RulesFileError, RulesFileNotFoundError
from treepack.core.rules import DEFAULT_EXCLUDED_FILES, build_rule_set, load_rules, parse_rules


class TestParseRules:
    def test_strips_and_skips_comments(self):
        content = "# comment\nnode_modules\n\n   dist  \n  # indented comment\nsrc\\gen\\out.ts\n"

        assert parse_rules(content) == ["node_modules", "dist", "src/gen/out.ts"]

    def test_crlf_content(self):
        assert parse_rules("a\r\nb\r\n") == ["a", "b"]


class TestLoadRules:
    def test_loads_rules_in_file_order(self, tmp_path, caplog):
        rules_file = tmp_path / "blacklist.txt"
        rules_file.write_text("node_modules\n*.log\nLICENSE\n", encoding="utf-8")

        with caplog.at_level(logging.INFO):
            rules = load_rules(rules_file)

        assert rules == ["node_modules", "*.log", "LICENSE"]
        assert any("Loaded 3 rules" in r.message for r in caplog.records)

    def test_missing_optional_file_warns(self, tmp_path, caplog):
        with caplog.at_level(logging.WARNING):
            rules = load_rules(tmp_path / "blacklist.txt")

        assert rules == []
        assert any("does not exist" in r.message for r in caplog.records)

    def test_missing_required_file_raises(self, tmp_path):
        with pytest.raises(RulesFileNotFoundError):
            load_rules(tmp_path / "blacklist.txt", required=True)

    def test_invalid_utf8_warns_and_returns_empty(self, tmp_path, caplog):
        rules_file = tmp_path / "blacklist.txt"
        rules_file.write_bytes(b"\xff\xfe\x00bad")

        with caplog.at_level(logging.WARNING):
            rules = load_rules(rules_file)

        assert rules == []
        assert any("Invalid UTF-8" in r.message for r in caplog.records)

    def test_directory_instead_of_file_warns(self, tmp_path, caplog):
        rules_dir = tmp_path / "blacklist.txt"
        rules_dir.mkdir()

        with caplog.at_level(logging.WARNING):
            rules = load_rules(rules_dir)

        assert rules == []
        assert any("Cannot read rules file" in r.message for r in caplog.records)

    def test_required_file_that_is_a_directory_raises(self, tmp_path):
        rules_dir = tmp_path / "rulesdir"
        rules_dir.mkdir()

        with pytest.raises(RulesFileError, match="Cannot read rules file"):
            load_rules(rules_dir, required=True)

    def test_required_file_with_invalid_utf8_raises(self, tmp_path):
        rules_file = tmp_path / "blacklist.txt"
        rules_file.write_bytes(b"\xff\xfe\x00bad")

        with pytest.raises(RulesFileError, match="Invalid UTF-8"):
            load_rules(rules_file, required=True)


class TestBuildRuleSet:
    def test_merges_in_order_without_duplicates(self):
        merged = build_rule_set(["a", "b"], ["b", "c"], ("a", "d"))

        assert merged == ("a", "b", "c", "d")

    def test_drops_empty_rules_and_normalizes(self):
        assert build_rule_set(["", "  ", "x\\y", "x/y"]) == ("x/y",)

    def test_default_excluded_files(self):
        assert "package-lock.json" in DEFAULT_EXCLUDED_FILES
        assert "*.spec.ts" in DEFAULT_EXCLUDED_FILES
        assert build_rule_set(DEFAULT_EXCLUDED_FILES) == DEFAULT_EXCLUDED_FILES
