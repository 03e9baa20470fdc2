from pathlib import Path
from urllib.parse import urlparse

from loguru import logger


def is_within_root(url: str, root: str) -> bool:
    """
    Check if a URL lies under the documentation root.
    Scheme and host must match and the path must be the root path itself
    or sit below it on a segment boundary.
    """
    try:
        parsed = urlparse(url)
        root_parsed = urlparse(root)
    except ValueError:
        return False

    if parsed.scheme not in ("http", "https"):
        logger.warning(f"Blocked unsupported scheme: {parsed.scheme}")
        return False

    if (parsed.scheme, parsed.netloc.lower()) != (
        root_parsed.scheme,
        root_parsed.netloc.lower(),
    ):
        return False

    root_path = root_parsed.path.rstrip("/")
    if parsed.path == root_path:
        return True
    return parsed.path.startswith(root_path + "/")


def is_safe_path(path: str | Path, base: str | Path) -> bool:
    """Check that *path* resolves to a location inside *base*."""
    try:
        resolved = Path(path).resolve()
        base_resolved = Path(base).resolve()
    except (OSError, RuntimeError):
        return False
    return resolved.is_relative_to(base_resolved)
