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

"""Network exfiltration patterns.

Outbound HTTP and socket calls parameterized by a variable, encode or
serialize calls that typically precede a send, and literal http(s) URLs.
Each pattern is matched on its own line; there is no data-flow link
between an encode call and a later send.
"""

from __future__ import annotations

import re

from vigil.scanner.patterns import EXTERNAL_URL, PatternRegistry, freeze_registry

_NODE = [
    re.compile(r"""fetch\s*\(\s*[a-zA-Z_$]\w*\s*[\+,]"""),
    re.compile(r"""axios\.(get|post|put|delete|patch)\s*\(\s*[a-zA-Z_$]\w*\s*[\+,]"""),
    re.compile(r"""http\.(get|post|request)\s*\(\s*[a-zA-Z_$]\w*\s*[\+,]"""),
    re.compile(r"""https\.(get|post|request)\s*\(\s*[a-zA-Z_$]\w*\s*[\+,]"""),
    re.compile(r"""btoa\s*\(\s*[a-zA-Z_$]\w*\s*\)"""),
    re.compile(r"""Buffer\.from\s*\(\s*[a-zA-Z_$]\w*\s*\)\.toString\s*\(\s*["']base64"""),
    re.compile(r"""JSON\.stringify\s*\(\s*[a-zA-Z_$]\w*\s*\)"""),
    EXTERNAL_URL,
    re.compile(r"""new WebSocket\s*\(\s*[a-zA-Z_$]\w*\s*[\+,]"""),
]

_C = [
    re.compile(r"""curl_easy_(setopt|perform)\s*\("""),
    re.compile(r"""socket\s*\(\s*AF_INET"""),
    re.compile(r"""connect\s*\("""),
    re.compile(r"""send\s*\(\s*[a-zA-Z_]\w*\s*,\s*buffer"""),
]

NETWORK_PATTERNS: PatternRegistry = freeze_registry({
    "go": [
        re.compile(r"""http\.(Get|Post|Put|Delete|Patch)\s*\(\s*[a-zA-Z_]\w*\s*[\+,]"""),
        re.compile(r"""http\.NewRequest\s*\(\s*["'][A-Z]+["'],\s*[a-zA-Z_]\w*\s*[\+,]"""),
        re.compile(r"""&?http\.Client\s*"""),
        re.compile(r"""\.Do\s*\("""),
        # encode before send
        re.compile(r"""base64\.(StdEncoding|RawStdEncoding)\.EncodeToString\s*\(\s*[a-zA-Z_]\w*\s*\)"""),
        re.compile(r"""hex\.EncodeToString\s*\(\s*[a-zA-Z_]\w*\s*\)"""),
        re.compile(r"""json\.Marshal\s*\(\s*[a-zA-Z_]\w*\s*\)"""),
        EXTERNAL_URL,
    ],
    "python": [
        re.compile(r"""requests\.(get|post|put|delete|patch|request)\s*\(\s*[a-zA-Z_]\w*\s*[\$,=]"""),
        re.compile(r"""urllib\.(request\.)?(urlopen|Request)\s*\(\s*[a-zA-Z_]\w*\s*[\$,]"""),
        re.compile(r"""urllib2\.urlopen\s*\(\s*[a-zA-Z_]\w*\s*[\$,]"""),
        re.compile(r"""http\.client\s*\("""),
        re.compile(r"""base64\.(b64encode|standard_b64encode)\s*\(\s*[a-zA-Z_]\w*\s*\)"""),
        re.compile(r"""binascii\.hexlify\s*\(\s*[a-zA-Z_]\w*\s*\)"""),
        re.compile(r"""json\.dumps\s*\(\s*[a-zA-Z_]\w*\s*\)"""),
        re.compile(r"""pickle\.(dumps|dump)\s*\(\s*[a-zA-Z_]\w*\s*\)"""),
        EXTERNAL_URL,
        re.compile(r"""socket\.(connect|send|sendall)\s*\(\s*[a-zA-Z_]\w*\s*[\$,]"""),
    ],
    "node": _NODE,
    "typescript": _NODE,
    "java": [
        re.compile(r"""HttpURLConnection\s*.*\.connect\s*\("""),
        re.compile(r"""HttpClient\s*(.*\.send\s*\()"""),
        re.compile(r"""RestTemplate\.(exchange|getFor|postFor)\s*\(\s*[a-zA-Z_]\w*\s*[\$,]"""),
        re.compile(r"""OkHttpClient\s*.*\.execute\s*\("""),
        re.compile(r"""Base64\.getEncoder\(\)\.encodeToString\s*\("""),
        re.compile(r"""DatatypeConverter\.printBase64Binary\s*\("""),
        re.compile(r"""JSON\.toJSONString\s*\("""),
        EXTERNAL_URL,
    ],
    "ruby": [
        re.compile(r"""Net::HTTP\.(get|post|put|delete|patch)\s*\(\s*[a-zA-Z_]\w*\s*"""),
        re.compile(r"""\.open\s*\(\s*[a-zA-Z_]\w*\s*\)"""),
        re.compile(r"""request\s*\(\s*[a-zA-Z_]\w*\s*\)"""),
        re.compile(r"""Base64\.encode64\s*\(\s*[a-zA-Z_]\w*\s*\)"""),
        re.compile(r"""\[.*\]\.pack\s*\("""),
        re.compile(r"""JSON\.generate\s*\(\s*[a-zA-Z_]\w*\s*\)"""),
        EXTERNAL_URL,
        re.compile(r"""Mechanize\s*\.?\s*new"""),
    ],
    "php": [
        re.compile(r"""curl_(exec|init|setopt)\s*\(\s*\$[a-zA-Z_]\w*\s*\)"""),
        re.compile(r"""file_get_contents\s*\(\s*\$[a-zA-Z_]\w*\s*[\$,]"""),
        re.compile(r"""fopen\s*\(\s*["']https?://.*\$[a-zA-Z_]\w*"""),
        re.compile(r"""base64_encode\s*\(\s*\$[a-zA-Z_]\w*\s*\)"""),
        re.compile(r"""json_encode\s*\(\s*\$[a-zA-Z_]\w*\s*\)"""),
        EXTERNAL_URL,
    ],
    "rust": [
        re.compile(r"""reqwest::(get|post|Client::new).*\.send\s*\(\)"""),
        re.compile(r"""ureq::(get|post)\s*\(\s*&?[a-zA-Z_]\w*"""),
        re.compile(r"""attohttpc\s*.*\.send\s*\(\)"""),
        EXTERNAL_URL,
    ],
    "c": _C,
    "cpp": _C,
    "swift": [
        re.compile(r"""URLSession\.shared\.(data|download)\s*\(\s*.*url:"""),
        re.compile(r"""URLRequest\s*\(url:\s*[a-zA-Z_]\w*"""),
        EXTERNAL_URL,
    ],
})
