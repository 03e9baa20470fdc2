"""Javadoc (JDK 17 layout) page parsing.

Three kinds of pages are read:

- the module index, listing modules
- module summaries, listing packages
- package summaries, listing classes and interfaces

and one kind is turned into a record: the type page, whose header, supertype
clause and field/constructor/method summary tables make a TypeDescriptor.
"""

import re
from urllib.parse import urldefrag, urljoin

from bs4 import BeautifulSoup
from loguru import logger

from javadoc_harvest.errors import PageStructureError, SoftParseError
from javadoc_harvest.models import TypeDescriptor
from javadoc_harvest.signatures import apply_signature
from javadoc_harvest.tables import RowKind, extract_rows, find_table
from javadoc_harvest.text import normalize, strip_generics

# ---------------------------------------------------------------------------
# Selectors
# ---------------------------------------------------------------------------

_MODULE_LINKS = "#all-modules-table .summary-table .col-first a"
_PACKAGE_LINKS = "#package-summary-table .summary-table .col-first a"
_CLASS_LINKS = "#class-summary .summary-table .col-first a"

_TITLE = "h1.title"
_SUBTITLES = ".header > .sub-title"
_EXTENDS_IMPLEMENTS = ".type-signature .extends-implements"

_FIELD_TABLE = ".field-summary .summary-table"
_CONSTRUCTOR_TABLE = ".constructor-summary .summary-table"
_METHOD_TABLES = (
    ".method-summary .summary-table",
    "#method-summary-table .summary-table",
)

# Title prefixes, longest first so "Enum Class" wins over "Class".
_KINDS: tuple[tuple[str, str], ...] = (
    ("annotation interface", "annotation"),
    ("annotation type", "annotation"),
    ("record class", "record"),
    ("enum class", "enum"),
    ("interface", "interface"),
    ("record", "record"),
    ("class", "class"),
    ("enum", "enum"),
)

_SUPERTYPES_RE = re.compile(
    r"^(?:extends (?P<extends>.+?))?\s*(?:implements (?P<implements>.+))?$"
)


def _soup(html: str) -> BeautifulSoup:
    return BeautifulSoup(html, "html.parser")


# ---------------------------------------------------------------------------
# Link discovery
# ---------------------------------------------------------------------------


def _resolve_links(anchors, page_url: str) -> list[str]:
    links: dict[str, None] = {}
    for anchor in anchors:
        href = anchor.get("href")
        if not href:
            continue
        url, _fragment = urldefrag(urljoin(page_url, href))
        links.setdefault(url)
    return list(links)


def module_links(html: str, page_url: str, prefix: str = "java.") -> list[str]:
    """Module page URLs from the module index, filtered by name prefix."""
    anchors = [
        a
        for a in _soup(html).select(_MODULE_LINKS)
        if normalize(a.get_text()).startswith(prefix)
    ]
    return _resolve_links(anchors, page_url)


def package_links(html: str, page_url: str) -> list[str]:
    """Package summary URLs listed on a module page."""
    return _resolve_links(_soup(html).select(_PACKAGE_LINKS), page_url)


def class_links(html: str, page_url: str) -> list[str]:
    """Class/interface page URLs listed on a package summary page."""
    return _resolve_links(_soup(html).select(_CLASS_LINKS), page_url)


# ---------------------------------------------------------------------------
# Type pages
# ---------------------------------------------------------------------------


def parse_title(title: str) -> tuple[str, str]:
    """Split an ``h1`` title like ``Enum Class Thread.State`` into kind and name."""
    text = normalize(strip_generics(title))
    lowered = text.lower()
    for prefix, kind in _KINDS:
        if lowered.startswith(prefix + " "):
            name = text[len(prefix) :].strip()
            if name:
                return kind, name
    raise PageStructureError(f"Unrecognized type title: {title!r}")


def parse_type_list(text: str) -> list[str]:
    # Strip first: "Map<K,V>, Cloneable" must not split inside the brackets.
    return [t.strip() for t in strip_generics(text).split(",") if t.strip()]


def parse_supertypes(clause: str) -> tuple[list[str] | None, list[str] | None]:
    """Parse ``extends A implements B, C`` into (extends, implements) lists.

    Interfaces can extend several types, so both sides are lists.
    """
    text = normalize(clause)
    match = _SUPERTYPES_RE.match(text)
    if not text or not match or not (match["extends"] or match["implements"]):
        raise PageStructureError(
            f"Can't parse extends-implements section, unexpected format: {clause!r}"
        )
    extends = parse_type_list(match["extends"]) if match["extends"] else None
    implements = parse_type_list(match["implements"]) if match["implements"] else None
    return extends, implements


def parse_type_page(
    html: str, url: str = "", issues: list[SoftParseError] | None = None
) -> TypeDescriptor:
    """Build a TypeDescriptor from one class/interface page.

    Raises PageStructureError when the page has no recognizable title or an
    unreadable supertype clause. Table and signature problems only degrade
    the record and are appended to *issues*.
    """
    root = _soup(html)

    title = root.select_one(_TITLE)
    if title is None:
        raise PageStructureError(f"No type title found on {url or 'page'}")
    kind, name = parse_title(title.get_text())

    package_name = ""
    module_name = ""
    for subtitle in root.select(_SUBTITLES):
        label = subtitle.find("span")
        content = subtitle.find("a")
        if label is None or content is None:
            continue
        match normalize(label.get_text()).rstrip(":").lower():
            case "package":
                package_name = normalize(content.get_text())
            case "module":
                module_name = normalize(content.get_text())

    logger.info(f"getting type data for {kind} {package_name}.{name}")

    extends_types = implements_types = None
    clause = root.select_one(_EXTENDS_IMPLEMENTS)
    if clause is not None:
        extends_types, implements_types = parse_supertypes(clause.get_text())

    fields = []
    table = find_table(root, _FIELD_TABLE)
    if table is not None:
        fields = extract_rows(table, RowKind.FIELD, issues)

    constructors = []
    table = find_table(root, _CONSTRUCTOR_TABLE)
    if table is not None:
        constructors = [
            apply_signature(row, issues)
            for row in extract_rows(table, RowKind.CONSTRUCTOR, issues)
        ]

    methods = []
    for selector in _METHOD_TABLES:
        table = find_table(root, selector)
        if table is None:
            continue
        methods = [
            apply_signature(row, issues)
            for row in extract_rows(table, RowKind.METHOD, issues)
        ]
        if methods:
            break

    return TypeDescriptor(
        kind=kind,
        name=name,
        package_name=package_name,
        module_name=module_name,
        extends_types=extends_types,
        implements_types=implements_types,
        fields=fields,
        constructors=constructors,
        methods=methods,
    )
