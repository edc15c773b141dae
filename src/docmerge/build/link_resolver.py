"""External documentation link resolution.

Links to external API docs (e.g., the JDK) need the remote site's element
list. Fetching it once into the cache lets the renderer link offline.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

import requests

from ..cache import Cache

# Newer renderers publish element-list, older ones package-list
LINK_LIST_NAMES = ("element-list", "package-list")


class LinkResolverError(Exception):
    """Raised when an external link list cannot be fetched in strict mode."""
    pass


@dataclass
class ResolvedLink:
    """An external documentation URL and, when available, its cached list."""

    url: str
    offline_dir: Optional[Path] = None

    def to_arguments(self) -> List[str]:
        """Renderer arguments for this link."""
        if self.offline_dir is not None:
            return ["-linkoffline", self.url, str(self.offline_dir)]
        return ["-link", self.url]


class LinkResolver:
    """Downloads and caches the element lists of external documentation sites."""

    def __init__(self, cache: Cache, strict: bool = False, timeout: float = 10):
        """Initialize link resolver.

        Args:
            cache: Cache providing the links directory
            strict: Raise instead of falling back to an online link
            timeout: HTTP timeout in seconds
        """
        self.cache = cache
        self.strict = strict
        self.timeout = timeout

    def resolve(self, url: str) -> ResolvedLink:
        """
        Resolve one external documentation URL.

        Args:
            url: Base URL of the external documentation

        Returns:
            ResolvedLink with the cached list directory, or without one when
            the list could not be fetched

        Raises:
            LinkResolverError: If fetching fails and strict mode is enabled
        """
        link_dir = self.cache.get_links_dir(url)
        for list_name in LINK_LIST_NAMES:
            if (link_dir / list_name).is_file():
                return ResolvedLink(url=url, offline_dir=link_dir)

        base_url = url if url.endswith("/") else f"{url}/"
        errors = []
        for list_name in LINK_LIST_NAMES:
            try:
                response = requests.get(f"{base_url}{list_name}", timeout=self.timeout)
                response.raise_for_status()
            except requests.RequestException as e:
                errors.append(f"{list_name}: {e}")
                continue

            link_dir.mkdir(parents=True, exist_ok=True)
            (link_dir / list_name).write_text(response.text, encoding="utf-8")
            logging.info(f"Cached {list_name} of {url} in {link_dir}")
            return ResolvedLink(url=url, offline_dir=link_dir)

        message = f"Could not fetch link list of {url}: {'; '.join(errors)}"
        if self.strict:
            raise LinkResolverError(message)
        logging.warning(message)
        return ResolvedLink(url=url)

    def resolve_all(self, urls: List[str]) -> List[ResolvedLink]:
        return [self.resolve(url) for url in urls]
