"""Decompose ``name(Type arg, ...)`` callable text into name and parameters."""

import re
from typing import NamedTuple, TypeVar

from javadoc_harvest.errors import SoftParseError, record_issue
from javadoc_harvest.models import CallableDescriptor, Parameter
from javadoc_harvest.text import normalize, strip_generics

_SIGNATURE_RE = re.compile(r"^([^\s()]+) ?\((.*)\)$")

C = TypeVar("C", bound=CallableDescriptor)


class Signature(NamedTuple):
    name: str
    parameters: list[Parameter] | None


def _parse_argument(arg: str) -> Parameter | None:
    parts = normalize(arg).rsplit(" ", 1)
    if not parts[0]:
        return None
    if len(parts) == 1:
        # Bare type, no parameter name shown
        return Parameter(type=parts[0])
    return Parameter(type=parts[0], name=parts[1])


def parse_signature(
    text: str, issues: list[SoftParseError] | None = None
) -> Signature:
    """Split callable text into its name and ordered parameter list.

    Returns ``parameters=None`` and records a soft error when the text is
    not of the form ``identifier(args)``.
    """
    match = _SIGNATURE_RE.match(normalize(strip_generics(text)))
    if not match:
        record_issue(issues, "Can't parse args, callable formatted wrong", text)
        return Signature(text, None)

    name, args = match.group(1), match.group(2)
    if not args.strip():
        return Signature(name, [])

    parameters: list[Parameter] = []
    for arg in args.split(","):
        parameter = _parse_argument(arg)
        if parameter is None:
            record_issue(issues, "Empty argument in callable signature", text)
            return Signature(text, None)
        parameters.append(parameter)
    return Signature(name, parameters)


def apply_signature(row: C, issues: list[SoftParseError] | None = None) -> C:
    """Return a copy of a constructor/method row with its signature decomposed."""
    signature = parse_signature(row.name, issues)
    return row.model_copy(
        update={"name": signature.name, "parameters": signature.parameters}
    )
