"""Tests for configuration loading and filesystem allowlist rules."""

from pathlib import Path

import pytest

from vigil.exceptions import ConfigError
from vigil.models.config import VigilConfig
from vigil.policy.allowlist import Allowlist, AllowRule
from vigil.policy.config_loader import CONFIG_FILE_NAME, is_disabled, load_config

FULL_CONFIG = """
security:
  filesystem:
    allow:
      - "pkg/tools/k8s.go:94"
      - "pkg/tools/k8s.go:os.ReadDir(chartsDir)"
      - "pkg/generated/**"
checks:
  disabled: ["security:network"]
execution:
  workers: 4
"""


class TestLoadConfig:
    def test_defaults_when_absent(self, tmp_path: Path):
        config = load_config(tmp_path)
        assert config == VigilConfig()
        assert config.execution.workers == 1
        assert config.security.filesystem.allow == []

    def test_full_file(self, tmp_path: Path):
        (tmp_path / CONFIG_FILE_NAME).write_text(FULL_CONFIG)
        config = load_config(tmp_path)
        assert len(config.security.filesystem.allow) == 3
        assert config.checks.disabled == ["security:network"]
        assert config.execution.workers == 4

    def test_empty_file(self, tmp_path: Path):
        (tmp_path / CONFIG_FILE_NAME).write_text("")
        assert load_config(tmp_path) == VigilConfig()

    def test_explicit_path(self, tmp_path: Path):
        cfg = tmp_path / "custom.yaml"
        cfg.write_text("execution:\n  workers: 2\n")
        assert load_config(tmp_path / "elsewhere", cfg).execution.workers == 2

    def test_explicit_path_missing(self, tmp_path: Path):
        with pytest.raises(ConfigError, match="not found"):
            load_config(tmp_path, tmp_path / "nope.yaml")

    @pytest.mark.parametrize(
        "content",
        [
            "security: [unclosed",
            "- just\n- a list\n",
            "unknown_section: {}\n",
            "execution:\n  workers: 0\n",
            "execution:\n  workers: many\n",
        ],
    )
    def test_invalid(self, content, tmp_path: Path):
        (tmp_path / CONFIG_FILE_NAME).write_text(content)
        with pytest.raises(ConfigError):
            load_config(tmp_path)

    def test_is_disabled(self):
        config = VigilConfig(checks={"disabled": ["security:net*"]})
        assert is_disabled("security:network", config)
        assert not is_disabled("security:filesystem", config)


class TestAllowRules:
    def test_parse_line_rule(self):
        assert AllowRule.parse("pkg/a.go:94") == AllowRule(path="pkg/a.go", line=94)

    def test_parse_text_rule(self):
        rule = AllowRule.parse("pkg/a.go:os.ReadDir(dir)")
        assert rule.text == "os.ReadDir(dir)"
        assert not rule.is_glob

    def test_text_containing_colon(self):
        rule = AllowRule.parse('pkg/a.go:http://host:80')
        assert rule.path == "pkg/a.go"
        assert rule.text == "http://host:80"

    def test_parse_glob(self):
        assert AllowRule.parse("pkg/generated/**").is_glob

    def test_backslashes_normalized(self):
        rule = AllowRule.parse("pkg\\a.go:3")
        assert rule.matches("pkg/a.go", 3, "")

    def test_allowlist(self):
        allowlist = Allowlist(["a.go:1", "gen/**", ""])
        assert len(allowlist) == 2
        assert allowlist.allows("a.go", 1, "x")
        assert allowlist.allows("gen/sub/b.go", 7, "x")
        assert not allowlist.allows("a.go", 2, "x")

    def test_empty_allowlist(self):
        assert not Allowlist()
        assert not Allowlist().allows("a.go", 1, "x")
