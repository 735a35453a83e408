"""Tests for the language table, file classifier and comment filter."""

import pytest

from vigil.scanner.languages import (
    LANGUAGE_TABLE,
    classify,
    comment_tokens,
    is_comment_line,
    is_source_file,
    is_test_file,
    should_skip_file,
)


class TestClassify:
    @pytest.mark.parametrize(
        "path, language",
        [
            ("main.go", "go"),
            ("app.py", "python"),
            ("index.js", "node"),
            ("app.ts", "typescript"),
            ("widget.tsx", "typescript"),
            ("Lib.HPP", "cpp"),
            ("pkg/sub/server.rs", "rust"),
            ("README.md", ""),
            ("Makefile", ""),
        ],
    )
    def test_extension_to_language(self, path, language):
        assert classify(path) == language

    def test_extensions_are_unique(self):
        seen = [ext for spec in LANGUAGE_TABLE.values() for ext in spec.extensions]
        assert len(seen) == len(set(seen))


class TestSourceFiles:
    def test_languages_and_config_are_source(self):
        assert is_source_file("main.go")
        assert is_source_file("deploy.yaml")
        assert is_source_file("install.sh")

    def test_other_files_are_not_source(self):
        assert not is_source_file("README.md")
        assert not is_source_file("logo.png")

    @pytest.mark.parametrize(
        "name", ["main_test.go", "app.test.js", "widget.spec.ts", "test_app.py", "Main_Test.go"]
    )
    def test_test_files(self, name):
        assert is_test_file(name)

    @pytest.mark.parametrize("name", ["main.go", "contest.py", "latest.go"])
    def test_non_test_files(self, name):
        assert not is_test_file(name)

    def test_skip_markers_match_substrings(self):
        """Production files with a marker in their name are excluded too."""
        assert should_skip_file("example_usage.go")
        assert should_skip_file("mock_client.go")
        assert should_skip_file("pkg/fixtures_loader.py")

    def test_docs_are_skipped(self):
        assert should_skip_file("NOTES.TXT")
        assert should_skip_file("guide.rst")

    def test_regular_file_not_skipped(self):
        assert not should_skip_file("main.go")


class TestCommentLines:
    def test_go_comment(self):
        assert is_comment_line("// x", "go")
        assert is_comment_line("    // indented", "go")

    def test_go_code(self):
        assert not is_comment_line("func main() {", "go")

    def test_python_comment(self):
        assert is_comment_line("# x", "python")

    def test_hash_is_not_a_go_comment(self):
        assert not is_comment_line("# x", "go")

    def test_block_comment_start(self):
        assert is_comment_line("/* start", "node")

    def test_blank_line_is_not_comment(self):
        assert not is_comment_line("   ", "python")
        assert not is_comment_line("", "go")

    def test_unknown_language_uses_defaults(self):
        assert comment_tokens("") == ("//", "#", "/*")
        assert is_comment_line("# key: value", "")
