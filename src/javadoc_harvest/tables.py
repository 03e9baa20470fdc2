"""Summary table extraction.

Javadoc summary tables are flat ``div`` grids: a header row of ``arity``
cells followed by data cells, row after row, sometimes with a trailing
decorative element. Two physical layouts exist:

- three columns: modifier-and-type, name, description
- two columns: name, description (constructors only)

Each logical row kind has its own decoder producing a typed record.
"""

from enum import Enum
from typing import Callable

from bs4 import BeautifulSoup, Tag

from javadoc_harvest.errors import SoftParseError, record_issue
from javadoc_harvest.models import (
    ConstructorDescriptor,
    FieldDescriptor,
    MethodDescriptor,
)
from javadoc_harvest.text import normalize, strip_generics

Row = FieldDescriptor | ConstructorDescriptor | MethodDescriptor


class RowKind(str, Enum):
    FIELD = "field"
    CONSTRUCTOR = "constructor"
    METHOD = "method"


_ARITY_MARKERS: dict[str, int] = {
    "two-column-summary": 2,
    "three-column-summary": 3,
    "four-column-summary": 4,
}
_DEFAULT_ARITY = 3

_VALID_ARITIES: dict[RowKind, frozenset[int]] = {
    RowKind.FIELD: frozenset({3}),
    RowKind.CONSTRUCTOR: frozenset({2, 3}),
    RowKind.METHOD: frozenset({3}),
}


def _split_modifiers_and_type(cell: str) -> tuple[list[str], str]:
    # "static final String" -> (["static", "final"], "String")
    tokens = cell.split()
    if not tokens:
        return [], ""
    return tokens[:-1], tokens[-1]


def _decode_field(cells: list[str]) -> FieldDescriptor:
    modifiers, type_ = _split_modifiers_and_type(cells[0])
    return FieldDescriptor(
        name=cells[1], modifiers=modifiers, type=type_, description=cells[2]
    )


def _decode_method(cells: list[str]) -> MethodDescriptor:
    modifiers, type_ = _split_modifiers_and_type(cells[0])
    return MethodDescriptor(
        name=cells[1], modifiers=modifiers, type=type_, description=cells[2]
    )


def _decode_constructor(cells: list[str]) -> ConstructorDescriptor:
    if len(cells) == 2:
        return ConstructorDescriptor(name=cells[0], description=cells[1])
    modifiers = [cells[0]] if cells[0] else []
    return ConstructorDescriptor(
        name=cells[1], modifiers=modifiers, description=cells[2]
    )


_DECODERS: dict[RowKind, Callable[[list[str]], Row]] = {
    RowKind.FIELD: _decode_field,
    RowKind.CONSTRUCTOR: _decode_constructor,
    RowKind.METHOD: _decode_method,
}


def table_arity(table: Tag) -> int:
    """Column count declared by the table's layout class."""
    for class_name in table.get("class") or []:
        if class_name in _ARITY_MARKERS:
            return _ARITY_MARKERS[class_name]
    return _DEFAULT_ARITY


def cell_text(cell: Tag) -> str:
    return normalize(strip_generics(cell.get_text()))


def extract_rows(
    table: Tag,
    kind: RowKind,
    issues: list[SoftParseError] | None = None,
) -> list[Row]:
    """Convert a summary table into typed rows of the given kind.

    A layout that is not valid for *kind* yields ``[]`` and one recorded
    soft error.
    """
    kind = RowKind(kind)
    arity = table_arity(table)
    if arity not in _VALID_ARITIES[kind]:
        record_issue(
            issues,
            f"{kind.value} table has {arity} columns",
            " ".join(table.get("class") or []),
        )
        return []

    cells = table.find_all("div", recursive=False)
    decode = _DECODERS[kind]
    rows: list[Row] = []
    # Skip the header row; stop when a full row no longer fits.
    for start in range(arity, len(cells) - arity + 1, arity):
        texts = [cell_text(cell) for cell in cells[start : start + arity]]
        rows.append(decode(texts))
    return rows


def find_table(soup: BeautifulSoup | Tag, *selectors: str) -> Tag | None:
    """Return the first summary table matched by any selector."""
    for selector in selectors:
        table = soup.select_one(selector)
        if table is not None:
            return table
    return None
