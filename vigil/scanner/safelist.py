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

"""Trusted-domain safelist for the network detector.

A host is safe when it is listed itself, or when its last two labels are
listed (``api.github.com`` is covered by ``github.com``). The two-label
rule does not understand multi-part public suffixes: ``evil.co.uk`` is
judged by ``co.uk``. This is a known limitation and is kept as is.
"""

from __future__ import annotations

import logging
import re
from typing import Iterable, Iterator
from urllib.parse import urlsplit

logger = logging.getLogger(__name__)


DEFAULT_SAFE_DOMAINS: frozenset[str] = frozenset({
    # Cloud providers
    "amazonaws.com",
    "amazonaws.com.cn",
    "azure.com",
    "azure-devices.net",
    "googleapis.com",
    "google.com",
    "gcp.gvt2.com",
    "cloudfunctions.net",
    "alistandard.com",
    # CDN and static assets
    "cloudflare.com",
    "cloudflareinsights.com",
    "cloudinary.com",
    "akamai.net",
    "akamaihd.net",
    # Package registries
    "npmjs.org",
    "yarnpkg.com",
    "registry.npmjs.org",
    "pypi.org",
    "files.pythonhosted.org",
    "crates.io",
    "repo.maven.apache.org",
    "repo1.maven.org",
    # Monitoring and analytics
    "segment.io",
    "segment.com",
    "amplitude.com",
    "mixpanel.com",
    "google-analytics.com",
    "googletagmanager.com",
    "analytics.google.com",
    "datadoghq.com",
    "datadoghq.eu",
    "newrelic.com",
    "rollbar.com",
    "sentry.io",
    "bugsnag.com",
    "honeybadger.io",
    "logentries.com",
    "loggly.com",
    "papertrailapp.com",
    # Payment processing
    "stripe.com",
    "paypal.com",
    "braintreepayments.com",
    "authorize.net",
    # Authentication
    "auth0.com",
    "okta.com",
    "onelogin.com",
    # Email
    "sendgrid.com",
    "mailchimp.com",
    "mailgun.com",
    "postmarkapp.com",
    # Developer APIs
    "api.github.com",
    "github.com",
    "gitlab.com",
    "bitbucket.org",
    "api.twilio.com",
    "slack.com",
    "discord.com",
    "api.openai.com",
    "api.anthropic.com",
    # Local development
    "localhost",
    "127.0.0.1",
    "0.0.0.0",
    "::1",
})

# Loose: any http(s)://host, quoted or not
_BARE_HOST_RE = re.compile(r"""https?://([a-zA-Z0-9.-]+)""")
# Strict: a URL that ends at a closing quote, handed to urlsplit
_QUOTED_URL_RE = re.compile(r"""https?://[^\s"']+(?=["'])""")


def parent_domain(host: str) -> str | None:
    """Return the last two labels of ``host``, or None for single-label hosts."""
    parts = host.split(".")
    if len(parts) < 2:
        return None
    return ".".join(parts[-2:])


class SafeDomainSet:
    """Immutable set of trusted registrable domains."""

    def __init__(self, domains: Iterable[str] = DEFAULT_SAFE_DOMAINS) -> None:
        self._domains = frozenset(d.lower() for d in domains)

    def __contains__(self, domain: object) -> bool:
        return isinstance(domain, str) and domain.lower() in self._domains

    def __len__(self) -> int:
        return len(self._domains)

    def is_safe_host(self, host: str) -> bool:
        host = host.lower().strip("[]")
        if host in self._domains:
            return True
        parent = parent_domain(host)
        return parent is not None and parent in self._domains

    def candidate_hosts(self, line: str) -> Iterator[str]:
        """Yield every host found on the line by both extraction strategies."""
        for match in _BARE_HOST_RE.finditer(line):
            yield match.group(1)
        for match in _QUOTED_URL_RE.finditer(line):
            try:
                host = urlsplit(match.group(0)).hostname
            except ValueError:
                logger.debug("Unparseable URL literal: %s", match.group(0))
                continue
            if host:
                yield host

    def line_has_safe_url(self, line: str) -> bool:
        """True if any URL on the line points at a trusted host."""
        return any(self.is_safe_host(host) for host in self.candidate_hosts(line))


DEFAULT_SAFELIST = SafeDomainSet()
