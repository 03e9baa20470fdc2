"""Tests for javadoc_harvest.signatures - callable signature decomposition."""

from javadoc_harvest.errors import SoftParseError
from javadoc_harvest.models import ConstructorDescriptor, MethodDescriptor, Parameter
from javadoc_harvest.signatures import apply_signature, parse_signature


class TestParseSignature:
    def test_two_parameters(self):
        sig = parse_signature("put(Object key, Object value)")
        assert sig.name == "put"
        assert sig.parameters == [
            Parameter(type="Object", name="key"),
            Parameter(type="Object", name="value"),
        ]

    def test_no_parameters(self):
        sig = parse_signature("size()")
        assert sig.name == "size"
        assert sig.parameters == []

    def test_malformed_records_one_soft_error(self):
        issues: list[SoftParseError] = []
        sig = parse_signature("malformedNoParens", issues)
        assert sig.name == "malformedNoParens"
        assert sig.parameters is None
        assert len(issues) == 1
        assert isinstance(issues[0], SoftParseError)

    def test_bare_type_argument_has_no_name(self):
        issues: list[SoftParseError] = []
        sig = parse_signature("wait(long)", issues)
        assert sig.parameters == [Parameter(type="long")]
        assert sig.parameters[0].name is None
        assert issues == []

    def test_generics_stripped_before_split(self):
        sig = parse_signature("putAll(Map<? extends K, ? extends V> m, int n)")
        assert sig.name == "putAll"
        assert sig.parameters == [
            Parameter(type="Map", name="m"),
            Parameter(type="int", name="n"),
        ]

    def test_array_and_varargs_types(self):
        sig = parse_signature("format(String format, Object... args)")
        assert sig.parameters == [
            Parameter(type="String", name="format"),
            Parameter(type="Object...", name="args"),
        ]
        sig = parse_signature("sort(int[] a)")
        assert sig.parameters == [Parameter(type="int[]", name="a")]

    def test_zero_width_space_before_paren(self):
        sig = parse_signature("get\u200b(int index)")
        assert sig.name == "get"
        assert sig.parameters == [Parameter(type="int", name="index")]

    def test_empty_argument_is_malformed(self):
        issues: list[SoftParseError] = []
        sig = parse_signature("f(int a, , int b)", issues)
        assert sig.parameters is None
        assert len(issues) == 1

    def test_issue_list_optional(self):
        """Soft errors are still non-fatal without a collector."""
        sig = parse_signature("broken(")
        assert sig.parameters is None


class TestApplySignature:
    def test_method_row_keeps_other_columns(self):
        row = MethodDescriptor(
            name="get(int index)",
            modifiers=["public"],
            type="E",
            description="Returns the element.",
        )
        parsed = apply_signature(row)
        assert isinstance(parsed, MethodDescriptor)
        assert parsed.name == "get"
        assert parsed.type == "E"
        assert parsed.modifiers == ["public"]
        assert parsed.parameters == [Parameter(type="int", name="index")]
        # the original row is untouched
        assert row.name == "get(int index)"
        assert row.parameters is None

    def test_unparseable_row_stays_usable(self):
        issues: list[SoftParseError] = []
        row = ConstructorDescriptor(name="Weird", description="No parens.")
        parsed = apply_signature(row, issues)
        assert parsed.name == "Weird"
        assert parsed.description == "No parens."
        assert parsed.parameters is None
        assert "args" not in parsed.to_json_dict()
        assert len(issues) == 1
