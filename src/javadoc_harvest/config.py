"""Configuration settings for the Javadoc harvester."""

from pathlib import Path

from pydantic_settings import BaseSettings


def _default_data_dir() -> Path:
    """Get default data directory (~/.javadoc-harvest/)."""
    return Path.home() / ".javadoc-harvest"


class Settings(BaseSettings):
    """Javadoc harvester configuration.

    Environment variables:
    - DOCS_ROOT: Documentation root; every fetched URL must live under it
        (default: JDK 17 API docs)
    - INDEX_PAGE: Module index page, relative to DOCS_ROOT (default: index.html)
    - ROOT_PACKAGE_PREFIX: Only modules whose name starts with this prefix
        are crawled (default: "java.")
    - CACHE_DIR: Page cache directory, default: ~/.javadoc-harvest/cache
    - OUTPUT_PATH: Output JSON path, default: ~/.javadoc-harvest/java_stdlib.json
    - MAX_CONCURRENCY: Maximum concurrent network fetches (default: 8)
    - FETCH_TIMEOUT: Per-request timeout in seconds (0 = no timeout)
    - FETCH_RETRIES: Connection retries per request (default: 3)
    - LOG_LEVEL: Loguru level for the stderr sink (default: INFO)
    """

    # Documentation source
    docs_root: str = "https://docs.oracle.com/en/java/javase/17/docs/api"
    index_page: str = "index.html"
    root_package_prefix: str = "java."

    # Storage
    cache_dir: str = ""  # Page cache directory, default: ~/.javadoc-harvest/cache
    output_path: str = ""  # Default: ~/.javadoc-harvest/java_stdlib.json

    # Fetching
    max_concurrency: int = 8
    fetch_timeout: float = 60.0
    fetch_retries: int = 3
    user_agent: str = "javadoc-harvest/0.1 (+https://github.com/javadoc-harvest)"

    # Logging
    log_level: str = "INFO"

    model_config = {"env_prefix": "", "case_sensitive": False}

    # --- Path helpers ---

    def get_data_dir(self) -> Path:
        """Get data directory (~/.javadoc-harvest/)."""
        return _default_data_dir()

    def get_cache_dir(self) -> Path:
        """Get page cache directory.

        Uses CACHE_DIR if set, otherwise ~/.javadoc-harvest/cache.
        """
        if self.cache_dir:
            return Path(self.cache_dir).expanduser()
        return self.get_data_dir() / "cache"

    def get_output_path(self) -> Path:
        """Get resolved output JSON path."""
        if self.output_path:
            return Path(self.output_path).expanduser()
        return self.get_data_dir() / "java_stdlib.json"

    def index_url(self) -> str:
        """Absolute URL of the module index page."""
        return f"{self.docs_root.rstrip('/')}/{self.index_page.lstrip('/')}"

    def get_timeout(self) -> float | None:
        """Request timeout for httpx, ``None`` when disabled."""
        if self.fetch_timeout <= 0:
            return None
        return self.fetch_timeout
