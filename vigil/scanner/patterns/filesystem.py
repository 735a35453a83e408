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

"""Filesystem abuse patterns.

File and path operations parameterized by a variable, path joins of two
variables, literal parent-directory and home references, literal system
directories, and environment variables used as path input.
"""

from __future__ import annotations

import re

from vigil.scanner.patterns import (
    HOME_DIR,
    PARENT_DIR,
    SYSTEM_DIR,
    PatternRegistry,
    freeze_registry,
)

_NODE = [
    re.compile(r"""fs\.(readFile|writeFile|readFileSync|writeFileSync|open|openSync)\s*\(\s*[a-zA-Z_$]\w*\s*[,+]"""),
    re.compile(r"""fs\.exists\s*\(\s*[a-zA-Z_$]\w*\s*[,+]"""),
    re.compile(r"""fs\.stat\s*\(\s*[a-zA-Z_$]\w*\s*"""),
    re.compile(r"""path\.(join|resolve|normalize)\s*\(\s*[a-zA-Z_$]\w*\s*[,+]"""),
    re.compile(r"""path\.join\s*\(\s*["']\.\./"""),
    re.compile(r"""path\.resolve\s*\(\s*["']\.\./"""),
    PARENT_DIR,
    HOME_DIR,
    SYSTEM_DIR,
    re.compile(r"""process\.env\.[a-zA-Z_$]\w*"""),
    re.compile(r'''child_process\.(exec|spawn)\s*\(\s*[a-zA-Z_$]\w*\s*[,+]"'''),
    re.compile(r"""fs-extra\.(copy|move|remove)"""),
]

_C = [
    re.compile(r"""fopen\s*\(\s*[a-zA-Z_]\w*\s*[\$,]"""),
    re.compile(r"""open\s*\(\s*[a-zA-Z_]\w*\s*[\$,]"""),
    re.compile(r"""remove\s*\(\s*[a-zA-Z_]\w*\s*\)"""),
    re.compile(r"""unlink\s*\(\s*[a-zA-Z_]\w*\s*\)"""),
    PARENT_DIR,
    SYSTEM_DIR,
    re.compile(r"""getenv\s*\("""),
]

FILESYSTEM_PATTERNS: PatternRegistry = freeze_registry({
    "go": [
        re.compile(r"""ioutil\.(ReadFile|WriteFile)\s*\(\s*[a-zA-Z_]\w*\s*[\+,]"""),
        re.compile(r"""os\.(Open|OpenFile|ReadFile|WriteFile)\s*\(\s*[a-zA-Z_]\w*\s*[\+,]"""),
        re.compile(r"""os\.(ReadDir|ReadFile)\s*\(\s*[a-zA-Z_]\w*\s*\)"""),
        # join of two variables
        re.compile(r"""filepath\.Join\s*\(\s*[a-zA-Z_]\w*\s*,\s*[a-zA-Z_]\w*\s*\)"""),
        PARENT_DIR,
        HOME_DIR,
        SYSTEM_DIR,
        re.compile(r"""os\.Getenv\s*\(\s*["']"""),
        re.compile(r"""filepath\.Abs\s*\(\s*[a-zA-Z_]\w*\s*\)"""),
    ],
    "python": [
        re.compile(r"""open\s*\(\s*[a-zA-Z_]\w*\s*[,+]"""),
        re.compile(r"""pathlib\.Path\s*\(\s*[a-zA-Z_]\w*\s*\)"""),
        re.compile(r"""Path\s*\(\s*[a-zA-Z_]\w*\s*\)[.]open\s*\("""),
        re.compile(r"""os\.path\.(join|abspath)\s*\(\s*[a-zA-Z_]\w*\s*,\s*[a-zA-Z_]\w*\s*\)"""),
        re.compile(r"""os\.(makedirs|removedirs|rename)\s*\(\s*[a-zA-Z_]\w*\s*[,+]"""),
        PARENT_DIR,
        HOME_DIR,
        SYSTEM_DIR,
        re.compile(r"""os\.getenv\s*\(\s*["']"""),
        re.compile(r"""os\.environ\["""),
        re.compile(r"""shutil\.(copy|move|rmtree)\s*\(\s*[a-zA-Z_]\w*\s*[,+]"""),
    ],
    "node": _NODE,
    "typescript": _NODE,
    "java": [
        re.compile(r"""new\s+File\s*\(\s*[a-zA-Z_]\w*\s*[\+,]"""),
        re.compile(r"""File\s*\(\s*[a-zA-Z_]\w*\s*\)"""),
        re.compile(r"""Files\.(read|write|copy|move)\s*\(\s*[a-zA-Z_]\w*"""),
        re.compile(r"""(FileReader|FileWriter)\s*\(\s*[a-zA-Z_]\w*\s*\)"""),
        re.compile(r"""(FileInputStream|FileOutputStream)\s*\(\s*[a-zA-Z_]\w*\s*\)"""),
        re.compile(r"""Paths\.get\s*\(\s*[a-zA-Z_]\w*"""),
        re.compile(r"""Path\.of\s*\(\s*[a-zA-Z_]\w*"""),
        PARENT_DIR,
        SYSTEM_DIR,
        re.compile(r"""System\.getenv\s*\("""),
    ],
    "ruby": [
        re.compile(r"""File\.(open|read|write|delete)\s*\(\s*[a-zA-Z_]\w*\s*[,+]"""),
        re.compile(r"""File\.open\s*\(\s*["'].*#\{[a-zA-Z_]\w*\}"""),
        re.compile(r"""IO\.(read|write|foreach)\s*\(\s*[a-zA-Z_]\w*\s*[,+]"""),
        re.compile(r"""FileUtils\.(cp|mv|rm|mkdir_p)\s*\(\s*[a-zA-Z_]\w*\s*[,+]"""),
        PARENT_DIR,
        SYSTEM_DIR,
        re.compile(r"""ENV\["""),
    ],
    "php": [
        re.compile(r"""file_(get|put|read|write)_contents\s*\(\s*\$[a-zA-Z_]\w*\s*[\$,]"""),
        re.compile(r"""fopen\s*\(\s*\$[a-zA-Z_]\w*\s*[\$,]"""),
        re.compile(r"""unlink\s*\(\s*\$[a-zA-Z_]\w*\s*\)"""),
        re.compile(r"""(is_dir|is_file)\s*\(\s*\$[a-zA-Z_]\w*\s*\)"""),
        PARENT_DIR,
        SYSTEM_DIR,
        re.compile(r"""\$_ENV\["""),
        re.compile(r"""\$_SERVER\["""),
    ],
    "c": _C,
    "cpp": _C,
    "rust": [
        re.compile(r"""File::open\s*\(\s*&?[a-zA-Z_]\w*\s*\)"""),
        re.compile(r"""File::create\s*\(\s*&?[a-zA-Z_]\w*\s*\)"""),
        re.compile(r"""fs::(read|write|remove|rename)\s*\(\s*&?[a-zA-Z_]\w*"""),
        re.compile(r"""std::fs::.*\s*\(\s*&?[a-zA-Z_]\w*"""),
        re.compile(r"""PathBuf::(from|push)\s*\(\s*&?[a-zA-Z_]\w*"""),
        PARENT_DIR,
        SYSTEM_DIR,
        re.compile(r"""std::env::var\s*\("""),
    ],
    "swift": [
        re.compile(r"""FileManager\.(default|s*).*\.(contents|attributes)\(atPath:\s*[a-zA-Z_]\w*"""),
        re.compile(r"""FileHandle\s*\(\s*[a-zA-Z_]\w*"""),
        PARENT_DIR,
        re.compile(r"""ProcessInfo\.processInfo\.environment"""),
    ],
})
