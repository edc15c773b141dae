"""Cache management for docmerge.

This module provides the directory layout for downloaded external link
lists and default aggregation output.

Cache Structure:
    .docmerge/
    ├── cache/
    │   └── links/
    │       └── {url_hash}/         # SHA256 hash of the documentation URL
    │           └── element-list    # or package-list for older renderers
    └── output/
        └── {aggregate_name}/       # Default output per aggregate

Hashing the URL keeps lists from different documentation sites apart.
"""

import hashlib
import os
import shutil
from pathlib import Path
from typing import Optional


class Cache:
    """Manages the docmerge cache directory structure.

    The cache can be located in the project directory (.docmerge/) or in a
    global location specified by the DOCMERGE_CACHE_DIR environment variable.
    """

    def __init__(self, project_dir: Optional[Path] = None):
        """Initialize cache manager.

        Args:
            project_dir: Project directory. If None, uses current directory.
        """
        if project_dir is None:
            project_dir = Path.cwd()

        self.project_dir = Path(project_dir).resolve()

        cache_env = os.environ.get("DOCMERGE_CACHE_DIR")
        if cache_env:
            self.cache_root = Path(cache_env).resolve()
        else:
            self.cache_root = self.project_dir / ".docmerge" / "cache"

        self.output_root = self.project_dir / ".docmerge" / "output"

    @staticmethod
    def hash_url(url: str) -> str:
        """Generate a SHA256 hash of a URL for cache directory naming.

        Args:
            url: The URL to hash

        Returns:
            First 16 characters of SHA256 hash (sufficient for uniqueness)
        """
        return hashlib.sha256(url.encode("utf-8")).hexdigest()[:16]

    @property
    def links_dir(self) -> Path:
        """Directory for downloaded external link lists."""
        return self.cache_root / "links"

    def get_links_dir(self, url: str) -> Path:
        """Get the directory holding the link list of one documentation URL."""
        return self.links_dir / self.hash_url(url)

    def get_output_dir(self, aggregate_name: str) -> Path:
        """Get the default output directory of an aggregate."""
        return self.output_root / aggregate_name

    def ensure_directories(self) -> None:
        """Create all cache directories if they don't exist."""
        for directory in [self.links_dir, self.output_root]:
            directory.mkdir(parents=True, exist_ok=True)

    def clean_output(self, aggregate_name: str) -> None:
        """Remove the default output directory of an aggregate."""
        output_dir = self.get_output_dir(aggregate_name)
        if output_dir.exists():
            shutil.rmtree(output_dir)
