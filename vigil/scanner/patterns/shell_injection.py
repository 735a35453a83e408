# Vigil — Suspicious Source Idiom Scanner
# Copyright (C) 2026 Vigil Project Contributors
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU Affero General Public License as published
# by the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE. See the
# GNU Affero General Public License for more details.
#
# You should have received a copy of the GNU Affero General Public License
# along with this program. If not, see <https://www.gnu.org/licenses/>.

"""Shell and code-execution patterns.

Flags process execution whose command is built from a variable,
concatenation or formatting, dynamic evaluation (eval/exec/compile), and
raw OS exec/spawn primitives.
"""

from __future__ import annotations

import re

from vigil.scanner.patterns import PatternRegistry, freeze_registry

_NODE = [
    # eval of a variable or of a concatenated string
    re.compile(r"""eval\s*\(\s*[a-zA-Z_$]\w*\s*\)"""),
    re.compile(r"""eval\s*\(\s*["']["'].*\+"""),
    re.compile(r"""Function\s*\(\s*[a-zA-Z_$]\w*"""),
    re.compile(r"""new Function\s*\("""),
    re.compile(r"""child_process\.(exec|execSync|spawn)\s*\(\s*[a-zA-Z_$]\w*\s*,"""),
    re.compile(r"""require\s*\(\s*["']child_process["']"""),
    re.compile(r"""vm\.(runInThisContext|runInNewContext|runInContext|compileFunction|Script)\s*\(\s*[a-zA-Z_$]\w*"""),
    # timers given code as a built string
    re.compile(r"""(setTimeout|setInterval)\s*\(\s*["'][^"']+["']\s*\+"""),
]

_C = [
    re.compile(r"""system\s*\(\s*[a-zA-Z_]\w*\s*\)"""),
    re.compile(r"""popen\s*\(\s*[a-zA-Z_]\w*\s*"""),
    re.compile(r"""exec[lv][pe]?\s*\(\s*[a-zA-Z_]\w*\s*"""),
]

SHELL_INJECTION_PATTERNS: PatternRegistry = freeze_registry({
    "go": [
        # shell with -c
        re.compile(r"""exec\.Command\s*\(\s*["']sh["'].*,\s*["']-c"""),
        re.compile(r"""exec\.Command\s*\(\s*["']bash["'].*,\s*["']-c"""),
        re.compile(r"""exec\.Command\s*\(\s*\w+\s*\+"""),
        re.compile(r"""exec\.Command\s*\(\s*fmt\.Sprintf"""),
        re.compile(r"""exec\.Command\s*\(\s*strings\.Join"""),
        # variable as the command
        re.compile(r"""exec\.Command\s*\(\s*[a-zA-Z_]\w*\s*,"""),
        # any other use of the exec package
        re.compile(r"""\bexec\b\.\w*"""),
        re.compile(r"""os\.Command\s*\("""),
        re.compile(r"""syscall\.Exec\s*\("""),
    ],
    "python": [
        re.compile(r"""eval\s*\(\s*[a-zA-Z_]\w*\s*\)"""),
        re.compile(r"""exec\s*\(\s*[a-zA-Z_]\w*\s*\)"""),
        re.compile(r"""execfile\s*\(\s*[a-zA-Z_]\w*\s*\)"""),
        re.compile(r"""(?<![\w.])compile\s*\(\s*[a-zA-Z_]\w*"""),
        re.compile(r"""subprocess\.(call|run|Popen|check_output)\([^)]*shell\s*=\s*True"""),
        re.compile(r"""os\.(system|popen|spawn[lpe])\s*\(\s*[a-zA-Z_]\w*\s*"""),
        re.compile(r"""(pickle|marshal|cPickle)\.loads\s*\(\s*[a-zA-Z_]\w*\s*\)"""),
        re.compile(r"""__import__\s*\(\s*[a-zA-Z_]\w*\s*\)"""),
        re.compile(r"""commands\.getoutput\s*\("""),
    ],
    "node": _NODE,
    "typescript": _NODE,
    "java": [
        re.compile(r"""Runtime\.getRuntime\(\)\.exec\s*\(\s*[a-zA-Z_]\w*\s*\+"""),
        re.compile(r"""Runtime\.getRuntime\(\)\.exec\s*\(\s*String\["""),
        re.compile(r"""new\s+ProcessBuilder\s*\(\s*[a-zA-Z_]\w*\s*\)"""),
        re.compile(r"""ProcessBuilder\s*\(\s*[a-zA-Z_]\w*\.split\s*\("""),
        re.compile(r"""ScriptEngine\.eval\s*\(\s*[a-zA-Z_]\w*\s*\)"""),
        re.compile(r"""ScriptEngineManager\.getEngineBy"""),
    ],
    "rust": [
        re.compile(r"""Command::new\s*\(\s*&?[a-zA-Z_]\w*\s*\)"""),
        re.compile(r"""std::process::Command::new\s*\(\s*&?[a-zA-Z_]\w*\s*\)"""),
        re.compile(r"""\.arg\s*\(\s*&?[a-zA-Z_]\w*\s*\)"""),
        re.compile(r"""libc::system\s*\("""),
    ],
    "ruby": [
        re.compile(r"""(eval|class_eval|instance_eval|module_eval)\s*\(\s*[a-zA-Z_]\w*\s*\)"""),
        # interpolated command strings
        re.compile(r"""system\s*\(\s*["'].*#\{[a-zA-Z_]\w*\}"""),
        re.compile(r"""exec\s*\(\s*["'].*#\{[a-zA-Z_]\w*\}"""),
        re.compile(r"""\s+`[a-zA-Z_]\w*\s*"""),
        re.compile(r"""Open3\.(popen3|capture2|capture3)\s*\(\s*["'].*#\{"""),
        re.compile(r"""%x\s*\(\s*["'].*#\{"""),
    ],
    "php": [
        re.compile(r"""eval\s*\(\s*\$[a-zA-Z_]\w*\s*\)"""),
        re.compile(r"""(system|exec|shell_exec|passthru)\s*\(\s*\$[a-zA-Z_]\w*\s*\)"""),
        re.compile(r"""proc_open\s*\(\s*\$[a-zA-Z_]\w*\s*\)"""),
        # /e modifier evaluates the replacement
        re.compile(r"""preg_replace\s*\([^)]*/e\s*\)"""),
    ],
    "c": _C,
    "cpp": _C,
    "swift": [
        re.compile(r"""Process\s*\(\s*executable:.*arguments:\s*[a-zA-Z_]\w*\s*\)"""),
        re.compile(r"""NSPipe\s*\(\s*\)"""),
        re.compile(r"""NSTask\s*\(\s*\)"""),
    ],
})
