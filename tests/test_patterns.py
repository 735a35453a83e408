"""Tests for the per-language pattern registries."""

import pytest

from vigil.scanner.coordinator import first_match
from vigil.scanner.languages import LANGUAGE_TABLE
from vigil.scanner.patterns.filesystem import FILESYSTEM_PATTERNS
from vigil.scanner.patterns.network import NETWORK_PATTERNS
from vigil.scanner.patterns.obfuscation import OBFUSCATION_PATTERNS
from vigil.scanner.patterns.shell_injection import SHELL_INJECTION_PATTERNS

ALL_REGISTRIES = [
    SHELL_INJECTION_PATTERNS,
    FILESYSTEM_PATTERNS,
    NETWORK_PATTERNS,
    OBFUSCATION_PATTERNS,
]


class TestRegistryShape:
    @pytest.mark.parametrize("registry", ALL_REGISTRIES)
    def test_every_language_covered(self, registry):
        for language in LANGUAGE_TABLE:
            assert registry[language], f"no patterns for {language}"

    @pytest.mark.parametrize("registry", ALL_REGISTRIES)
    def test_shared_registries(self, registry):
        assert registry["typescript"] == registry["node"]
        assert registry["cpp"] == registry["c"]

    def test_read_only(self):
        with pytest.raises(TypeError):
            SHELL_INJECTION_PATTERNS["go"] = ()

    def test_obfuscation_has_common(self):
        assert OBFUSCATION_PATTERNS["common"]
        assert "common" not in SHELL_INJECTION_PATTERNS


class TestShellInjection:
    def test_go_shell_with_variable(self):
        line = 'cmd := exec.Command("sh", "-c", userInput)'
        assert first_match(line, SHELL_INJECTION_PATTERNS["go"]) == 'exec.Command("sh", "-c'

    def test_python_builtin_compile(self):
        line = 'code = compile(source, "<string>", "exec")'
        assert first_match(line, SHELL_INJECTION_PATTERNS["python"]) == "compile(source"

    def test_python_re_compile_not_flagged(self):
        assert first_match("WORD = re.compile(pattern)", SHELL_INJECTION_PATTERNS["python"]) is None

    def test_python_shell_true(self):
        assert first_match("subprocess.run(cmd, shell=True)", SHELL_INJECTION_PATTERNS["python"])

    def test_php_system(self):
        assert first_match("system($cmd);", SHELL_INJECTION_PATTERNS["php"]) == "system($cmd)"

    def test_node_eval(self):
        assert first_match("eval(userCode);", SHELL_INJECTION_PATTERNS["node"]) == "eval(userCode)"


class TestFileSystem:
    def test_go_parent_dir(self):
        line = 'data, _ := ioutil.ReadFile("../../../etc/passwd")'
        assert first_match(line, FILESYSTEM_PATTERNS["go"]) == "../"

    def test_go_literal_path_is_safe(self):
        line = 'data, _ := ioutil.ReadFile("config.json")'
        assert first_match(line, FILESYSTEM_PATTERNS["go"]) is None

    def test_python_open_variable(self):
        assert first_match('with open(path, "w") as f:', FILESYSTEM_PATTERNS["python"]) == "open(path,"

    def test_python_environ(self):
        assert first_match('home = os.environ["HOME"]', FILESYSTEM_PATTERNS["python"])

    def test_java_reader(self):
        line = "BufferedReader r = new BufferedReader(new FileReader(name));"
        assert first_match(line, FILESYSTEM_PATTERNS["java"]) == "FileReader(name)"


class TestNetwork:
    def test_go_get_of_bare_variable_not_matched(self):
        assert first_match("resp, _ := http.Get(userURL)", NETWORK_PATTERNS["go"]) is None

    def test_go_get_of_concatenation(self):
        assert first_match('http.Get(baseURL + "/upload")', NETWORK_PATTERNS["go"])

    def test_go_url_literal(self):
        line = 'userURL := "http://suspicious-domain.com/data"'
        assert first_match(line, NETWORK_PATTERNS["go"]) == '"http://suspicious-domain.com/data'

    def test_python_requests(self):
        assert first_match("requests.post(url, data=payload)", NETWORK_PATTERNS["python"])


class TestObfuscation:
    def _patterns(self, language):
        return OBFUSCATION_PATTERNS[language] + OBFUSCATION_PATTERNS["common"]

    def test_long_base64_literal(self):
        line = 'encoded := "SGVsbG8gV29ybGQgV2l0aCBIaWdoIEVudHJvcHkSGVsbG8="'
        assert first_match(line, self._patterns("go"))

    def test_python_re_compile_not_flagged(self):
        assert first_match('WORD = re.compile(r"x")', self._patterns("python")) is None

    def test_node_atob(self):
        assert first_match("const s = atob(payload);", self._patterns("node")) == "atob("

    def test_single_character_array(self):
        line = 'k = ["a", "b", "c", "d", "e", "f", "g", "h", "i", "j", "k", "l"]'
        assert first_match(line, OBFUSCATION_PATTERNS["common"])
