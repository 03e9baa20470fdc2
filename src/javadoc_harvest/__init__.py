"""Javadoc harvester - type signature database from Javadoc API pages."""

from importlib.metadata import version

from javadoc_harvest.__main__ import _cli as main
from javadoc_harvest.text import normalize, strip_generics

__version__ = version("javadoc-harvest")
__all__ = ["main", "normalize", "strip_generics", "__version__"]
