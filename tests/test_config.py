import os
from pathlib import Path
from unittest import mock

from javadoc_harvest.config import Settings


def test_defaults_point_at_jdk17_docs():
    """Defaults crawl the JDK 17 API docs under java.* modules."""
    with mock.patch.dict(os.environ, {}, clear=True):
        settings = Settings()

    assert settings.docs_root == "https://docs.oracle.com/en/java/javase/17/docs/api"
    assert settings.root_package_prefix == "java."
    assert settings.index_url() == (
        "https://docs.oracle.com/en/java/javase/17/docs/api/index.html"
    )


def test_env_overrides():
    """Settings are read from environment variables, case-insensitively."""
    env = {
        "DOCS_ROOT": "https://docs.example.com/api/",
        "index_page": "/overview.html",
        "MAX_CONCURRENCY": "2",
        "LOG_LEVEL": "DEBUG",
    }
    with mock.patch.dict(os.environ, env, clear=True):
        settings = Settings()

    assert settings.index_url() == "https://docs.example.com/api/overview.html"
    assert settings.max_concurrency == 2
    assert settings.log_level == "DEBUG"


# -----------------------------------------------------------------------
# Path helpers
# -----------------------------------------------------------------------


def test_default_paths_under_data_dir():
    settings = Settings(cache_dir="", output_path="")
    data_dir = Path.home() / ".javadoc-harvest"
    assert settings.get_cache_dir() == data_dir / "cache"
    assert settings.get_output_path() == data_dir / "java_stdlib.json"


def test_explicit_paths_expanded(tmp_path):
    settings = Settings(cache_dir="~/pages", output_path=str(tmp_path / "out.json"))
    assert settings.get_cache_dir() == Path.home() / "pages"
    assert settings.get_output_path() == tmp_path / "out.json"


def test_timeout_zero_disables():
    assert Settings(fetch_timeout=0).get_timeout() is None
    assert Settings(fetch_timeout=15).get_timeout() == 15
