"""Error taxonomy for the harvester.

Hard errors (``ConfigurationError``, ``FetchError``, ``PageStructureError``)
are raised. ``SoftParseError`` is never raised across a component boundary:
it is appended to the caller's ``issues`` list and the affected record is
returned in degraded form.
"""

from loguru import logger


class HarvestError(Exception):
    """Base class for harvester errors."""


class ConfigurationError(HarvestError):
    """A URL or path falls outside the configured documentation root."""


class FetchError(HarvestError):
    """A page could not be retrieved."""

    def __init__(self, url: str, status: int | None = None, reason: str = ""):
        self.url = url
        self.status = status
        self.reason = reason
        detail = f"status {status}" if status is not None else (reason or "no response")
        super().__init__(f"Failed to fetch {url}: {detail}")


class PageStructureError(HarvestError):
    """A type page is missing a section every type page must have."""


class SoftParseError(HarvestError):
    """Non-fatal extraction failure that degrades a record."""

    def __init__(self, message: str, context: str = ""):
        self.message = message
        self.context = context
        super().__init__(f"{message}: {context}" if context else message)


def record_issue(
    issues: list[SoftParseError] | None, message: str, context: str = ""
) -> SoftParseError:
    """Log a soft parse error and append it to *issues* when given."""
    issue = SoftParseError(message, context)
    logger.warning(str(issue))
    if issues is not None:
        issues.append(issue)
    return issue
