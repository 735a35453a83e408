"""End-to-end tests for the four security detectors."""

import re
from pathlib import Path

import pytest

from vigil.checks.filesystem import FileSystemCheck
from vigil.checks.network import NetworkCheck
from vigil.checks.obfuscation import HIGH_ENTROPY_DESCRIPTION, ObfuscationCheck
from vigil.checks.shell_injection import ShellInjectionCheck
from vigil.exceptions import ScanRootError
from vigil.models.findings import FindingType, Severity
from vigil.models.results import Status
from vigil.scanner.safelist import SafeDomainSet

SAFE_GO = """package main

import "fmt"

func main() {
	fmt.Println("Hello, World!")
}
"""

SHELL_GO = """package main

import (
	"os/exec"
	"fmt"
)

func main() {
	userInput := "some command"
	cmd := exec.Command("sh", "-c", userInput)
	fmt.Println(cmd)
}
"""

TRAVERSAL_GO = """package main

import (
	"io/ioutil"
	"fmt"
)

func main() {
	data, _ := ioutil.ReadFile("../../../etc/passwd")
	fmt.Println(data)
}
"""

NETWORK_GO = """package main

import (
	"net/http"
	"fmt"
)

func main() {
	userURL := "http://suspicious-domain.com/data"
	resp, _ := http.Get(userURL)
	fmt.Println(resp)
}
"""

ENCODED_GO = """package main

import "encoding/base64"

func main() {
	// Use a longer base64 string to match the common pattern (40+ chars)
	encoded := "SGVsbG8gV29ybGQgV2l0aCBIaWdoIEVudHJvcHkSGVsbG8gV29ybGQgV2l0aCBIaWdoIEVudHJvcHk="
	data, _ := base64.StdEncoding.DecodeString(encoded)
	println(string(data))
}
"""

ALL_CHECKS = [ShellInjectionCheck, FileSystemCheck, NetworkCheck, ObfuscationCheck]


def _write(root: Path, rel: str, content: str) -> None:
    path = root / rel
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content)


class TestIdentity:
    @pytest.mark.parametrize(
        "check_cls, check_id, name",
        [
            (ShellInjectionCheck, "security:shell_injection", "Shell Injection Detection"),
            (FileSystemCheck, "security:filesystem", "File System Safety"),
            (NetworkCheck, "security:network", "Network Exfiltration Detection"),
            (ObfuscationCheck, "security:obfuscation", "Code Obfuscation Detection"),
        ],
    )
    def test_id_and_name(self, check_cls, check_id, name):
        check = check_cls()
        assert check.id == check_id
        assert check.name == name

    @pytest.mark.parametrize("check_cls", ALL_CHECKS)
    def test_missing_root(self, check_cls, tmp_path: Path):
        with pytest.raises(ScanRootError):
            check_cls().run(tmp_path / "missing")


class TestSafeCode:
    """A tree with none of the idioms passes every detector."""

    @pytest.mark.parametrize(
        "check_cls, message",
        [
            (ShellInjectionCheck, "No dangerous shell/code execution patterns detected"),
            (FileSystemCheck, "No path traversal or unsafe file operations detected"),
            (NetworkCheck, "No suspicious network operations detected"),
            (ObfuscationCheck, "No obfuscated code or encoded strings detected"),
        ],
    )
    def test_all_pass(self, check_cls, message, tmp_path: Path):
        _write(tmp_path, "main.go", SAFE_GO)
        result = check_cls().run(tmp_path)
        assert result.passed
        assert result.status is Status.PASS
        assert result.message == message
        assert result.findings == []

    def test_empty_tree(self, tmp_path: Path):
        for check_cls in ALL_CHECKS:
            assert check_cls().run(tmp_path).passed


class TestShellInjection:
    def test_shell_with_variable(self, tmp_path: Path):
        _write(tmp_path, "main.go", SHELL_GO)
        result = ShellInjectionCheck().run(tmp_path)

        assert not result.passed
        assert result.status is Status.FAIL
        assert len(result.findings) == 1
        finding = result.findings[0]
        assert finding.line == 10
        assert finding.type is FindingType.SHELL_INJECTION
        assert finding.severity is Severity.CRITICAL
        assert finding.description == 'go pattern detected (exec.Command("sh", "-c)'
        assert result.message == f"Dangerous pattern detected: {finding}"

    def test_comment_ignored(self, tmp_path: Path):
        _write(tmp_path, "main.go", '// cmd := exec.Command("sh", "-c", userInput)\n')
        assert ShellInjectionCheck().run(tmp_path).passed

    def test_test_files_ignored(self, tmp_path: Path):
        _write(tmp_path, "main_test.go", SHELL_GO)
        assert ShellInjectionCheck().run(tmp_path).passed

    def test_language_in_description(self, tmp_path: Path):
        _write(tmp_path, "web/app.ts", "const out = eval(userCode);\n")
        result = ShellInjectionCheck().run(tmp_path)
        assert result.findings[0].description == "typescript pattern detected (eval(userCode))"
        assert result.findings[0].file == "web/app.ts"

    def test_long_match_truncated(self, tmp_path: Path):
        line = 'exec.Command("sh", ' + '"x", ' * 40 + '"-c", cmd)\n'
        _write(tmp_path, "main.go", line)
        description = ShellInjectionCheck().run(tmp_path).findings[0].description
        assert description.endswith("...)")
        assert len(description) == len("go pattern detected ()") + 103

    def test_registry_override(self, tmp_path: Path):
        _write(tmp_path, "main.go", SAFE_GO)
        check = ShellInjectionCheck(patterns={"go": (re.compile(r"fmt\.Println"),)})
        result = check.run(tmp_path)
        assert [f.line for f in result.findings] == [6]

    def test_cap_and_summary(self, tmp_path: Path):
        """Sixty matching lines produce exactly fifty findings and the walk stops."""
        _write(tmp_path, "a.go", 'cmd := exec.Command("sh", "-c", userInput)\n' * 60)
        _write(tmp_path, "b.go", 'cmd := exec.Command("sh", "-c", userInput)\n')
        result = ShellInjectionCheck().run(tmp_path)

        assert len(result.findings) == 50
        assert {f.file for f in result.findings} == {"a.go"}
        assert result.message.startswith("50 dangerous patterns detected: ")
        assert result.message.endswith(" (47 more)")

    def test_few_findings_listed(self, tmp_path: Path):
        _write(tmp_path, "a.go", 'cmd := exec.Command("sh", "-c", userInput)\n' * 2)
        result = ShellInjectionCheck().run(tmp_path)
        assert result.message.startswith("Dangerous patterns detected: ")
        assert result.message.count("a.go:") == 2


class TestFileSystem:
    def test_path_traversal(self, tmp_path: Path):
        _write(tmp_path, "main.go", TRAVERSAL_GO)
        result = FileSystemCheck().run(tmp_path)

        assert result.status is Status.FAIL
        assert "path traversal" in result.message.lower()
        assert len(result.findings) == 1
        assert result.findings[0].line == 9
        assert result.findings[0].severity is Severity.HIGH
        assert result.findings[0].description == "unsafe file operation: ../"

    def test_literal_path_passes(self, tmp_path: Path):
        _write(tmp_path, "main.go", 'data, _ := ioutil.ReadFile("config.json")\n')
        assert FileSystemCheck().run(tmp_path).passed

    @pytest.mark.parametrize(
        "rule",
        ["main.go:9", 'main.go:ReadFile("../', "*.go", "main.go"],
    )
    def test_allowlist_suppresses(self, rule, tmp_path: Path):
        _write(tmp_path, "main.go", TRAVERSAL_GO)
        assert FileSystemCheck(allowlist=[rule]).run(tmp_path).passed

    @pytest.mark.parametrize("rule", ["main.go:8", "main.go:os.Open", "pkg/**", "other.go:9"])
    def test_allowlist_non_matching(self, rule, tmp_path: Path):
        _write(tmp_path, "main.go", TRAVERSAL_GO)
        assert not FileSystemCheck(allowlist=[rule]).run(tmp_path).passed

    def test_allowlist_glob_below_directory(self, tmp_path: Path):
        _write(tmp_path, "pkg/gen/deep/main.go", TRAVERSAL_GO)
        _write(tmp_path, "cmd/main.go", TRAVERSAL_GO)
        result = FileSystemCheck(allowlist=["pkg/gen/**"]).run(tmp_path)
        assert [f.file for f in result.findings] == ["cmd/main.go"]


class TestNetwork:
    def test_unsafe_host(self, tmp_path: Path):
        _write(tmp_path, "main.go", NETWORK_GO)
        result = NetworkCheck().run(tmp_path)

        assert result.status is Status.WARN
        assert not result.passed
        assert len(result.findings) == 1
        finding = result.findings[0]
        assert finding.line == 9
        assert finding.severity is Severity.MEDIUM
        assert finding.description == 'suspicious network operation: "http://suspicious-domain.com/data'
        assert result.message.startswith("Suspicious network operation detected: ")

    def test_safelisted_host(self, tmp_path: Path):
        _write(tmp_path, "main.go", 'resp, _ := http.Get("https://api.github.com/repos")\n')
        assert NetworkCheck().run(tmp_path).passed

    def test_custom_safelist(self, tmp_path: Path):
        _write(tmp_path, "main.go", NETWORK_GO)
        check = NetworkCheck(safelist=SafeDomainSet(["suspicious-domain.com"]))
        assert check.run(tmp_path).passed

    def test_python_requests(self, tmp_path: Path):
        _write(tmp_path, "client.py", "resp = requests.post(url, data=payload)\n")
        result = NetworkCheck().run(tmp_path)
        assert result.status is Status.WARN


class TestObfuscation:
    def test_encoded_string(self, tmp_path: Path):
        _write(tmp_path, "main.go", ENCODED_GO)
        result = ObfuscationCheck().run(tmp_path)

        assert result.status is Status.FAIL
        assert len(result.findings) >= 1
        assert result.findings[0].line == 8
        assert result.findings[0].severity is Severity.HIGH
        assert result.findings[0].description.startswith("obfuscation pattern: ")

    def test_literal_passed_to_decoder(self, tmp_path: Path):
        _write(
            tmp_path,
            "main.go",
            'data, _ := base64.StdEncoding.DecodeString("'
            'SGVsbG8gV29ybGQgV2l0aCBIaWdoIEVudHJvcHkSGVsbG8gV29ybGQgV2l0aCBIaWdoIEVudHJvcHk=")\n',
        )
        assert not ObfuscationCheck().run(tmp_path).passed

    def test_escapes_hidden_in_comment(self, tmp_path: Path):
        _write(tmp_path, "main.go", "// \\x48\\x65\\x6c\\x6c\\x6f\n")
        result = ObfuscationCheck().run(tmp_path)
        assert len(result.findings) == 1
        assert result.findings[0].description == "obfuscation pattern: \\x48"

    def test_plain_comment_ignored(self, tmp_path: Path):
        _write(tmp_path, "main.go", '// just a note about "Hello, World!"\n')
        assert ObfuscationCheck().run(tmp_path).passed

    def test_config_files_use_common_patterns(self, tmp_path: Path):
        _write(tmp_path, "deploy.yaml", 'token: "SGVsbG8gV29ybGQgV2l0aCBIaWdoIEVudHJvcHkSGVsbG8="\n')
        result = ObfuscationCheck().run(tmp_path)
        assert [f.file for f in result.findings] == ["deploy.yaml"]
        # Other detectors do not open config files
        assert ShellInjectionCheck().run(tmp_path).passed

    def test_high_entropy_literal(self, tmp_path: Path):
        payload = "".join(chr(0x100 + i) for i in range(256))
        (tmp_path / "main.py").write_text(f'blob = "{payload}"\n', encoding="utf-8")
        result = ObfuscationCheck().run(tmp_path)
        assert result.findings[0].description == HIGH_ENTROPY_DESCRIPTION

    def test_message_for_many(self, tmp_path: Path):
        _write(tmp_path, "main.js", "const s = atob(payload);\n" * 5)
        result = ObfuscationCheck().run(tmp_path)
        assert result.message.startswith("5 obfuscation patterns detected: ")
        assert result.message.endswith(" (2 more)")

    def test_registry_override_accepts_lists(self, tmp_path: Path):
        _write(tmp_path, "main.go", "x := BAD\n")
        result = ObfuscationCheck(patterns={"go": [re.compile("BAD")]}).run(tmp_path)
        assert [f.line for f in result.findings] == [1]
