"""On-disk page cache keyed by URL.

Each page under the documentation root is stored at the same relative path
under the cache directory, so ``<root>/java.base/java/lang/String.html``
lives at ``<cache_dir>/java.base/java/lang/String.html``. Pages are
immutable per URL: entries never expire and the whole directory can be
deleted to force a refresh. The fragment of a URL is ignored; a URL with a
query string is refused, since two queries on one page would share a file.

Writes go through a temporary file and an atomic rename, so concurrent
writers of the same URL cannot leave a torn file behind.
"""

import os
import shutil
import tempfile
from pathlib import Path
from urllib.parse import unquote, urldefrag, urlparse

from loguru import logger

from javadoc_harvest.errors import ConfigurationError
from javadoc_harvest.security import is_safe_path, is_within_root

_DIRECTORY_INDEX = "index.html"


class PageCache:
    """Directory-tree cache mirroring the documentation root."""

    def __init__(self, cache_dir: Path, docs_root: str):
        self._cache_dir = Path(cache_dir)
        self._docs_root = docs_root.rstrip("/")
        self._root_path = urlparse(self._docs_root).path
        logger.debug(f"PageCache initialized at {self._cache_dir}")

    @property
    def cache_dir(self) -> Path:
        return self._cache_dir

    def path_for(self, url: str) -> Path:
        """Map a URL to its cache file.

        Raises ConfigurationError for URLs outside the documentation root,
        URLs with a query string, and suffixes that would escape the cache
        directory.
        """
        url, _fragment = urldefrag(url)
        if urlparse(url).query:
            raise ConfigurationError(f"Query strings are not cacheable: {url}")
        if not is_within_root(url, self._docs_root):
            raise ConfigurationError(
                f"URL is not under the documentation root {self._docs_root}: {url}"
            )

        suffix = unquote(urlparse(url).path)[len(self._root_path) :].lstrip("/")
        if not suffix or suffix.endswith("/"):
            suffix += _DIRECTORY_INDEX

        path = self._cache_dir / suffix
        if not is_safe_path(path, self._cache_dir):
            raise ConfigurationError(f"Cache path escapes cache directory: {url}")
        return path

    def get(self, url: str) -> str | None:
        """Return cached page content, or None on a miss."""
        path = self.path_for(url)
        if path.is_file():
            logger.debug(f"Cache HIT: {url}")
            return path.read_text(encoding="utf-8")
        logger.debug(f"Cache MISS: {url}")
        return None

    def set(self, url: str, content: str) -> Path:
        """Durably store page content, creating parent directories."""
        path = self.path_for(url)
        path.parent.mkdir(parents=True, exist_ok=True)

        fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(content)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_name, path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

        logger.debug(f"Cache SET: {url} -> {path}")
        return path

    def clear(self) -> int:
        """Delete every cached page. Returns the number of files removed."""
        if not self._cache_dir.exists():
            return 0
        count = sum(1 for p in self._cache_dir.rglob("*") if p.is_file())
        shutil.rmtree(self._cache_dir)
        logger.info(f"Cleared {count} cached pages from {self._cache_dir}")
        return count

    def stats(self) -> dict:
        """Get cache statistics."""
        if not self._cache_dir.exists():
            return {"pages": 0, "bytes": 0}
        files = [p for p in self._cache_dir.rglob("*") if p.is_file()]
        return {
            "pages": len(files),
            "bytes": sum(p.stat().st_size for p in files),
        }
