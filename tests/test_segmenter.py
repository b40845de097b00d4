"""Tests for procedure segmentation."""

import textwrap

import pytest

from xdocgen.parsers.errors import DeclarationMalformedError
from xdocgen.parsers.segmenter import (
    parameter_list_span,
    procedure_spans,
    segment_procedures,
    strip_procedures,
)

MODULE_SOURCE = textwrap.dedent("""\
    Attribute VB_Name = "MathUtils"
    '@Author: Jane Doe
    Option Explicit

    Public Function Add(a As Integer, b As Integer) As Integer
        Add = a + b
    End Function

    Private Sub Reset()
        Exit Sub
    End Sub

    '@Todo: more helpers
    Friend Static Function Counter() As Long
        Counter = 1
    End Function
""")


class TestSegmentProcedures:
    """Tests for splitting a module into procedures."""

    def test_no_procedures(self) -> None:
        assert segment_procedures("Option Explicit\nDim x As Long\n") == []

    def test_empty_source(self) -> None:
        assert segment_procedures("") == []

    def test_order_preserved(self) -> None:
        procedures = segment_procedures(MODULE_SOURCE)
        assert len(procedures) == 3
        assert procedures[0].startswith("Public Function Add(")
        assert procedures[1].startswith("Private Sub Reset(")
        assert procedures[2].startswith("Friend Static Function Counter(")

    def test_procedure_spans_to_end_keyword(self) -> None:
        procedures = segment_procedures(MODULE_SOURCE)
        assert procedures[0].endswith("End Function")
        assert procedures[1].endswith("End Sub")

    def test_exit_statement_does_not_close(self) -> None:
        procedures = segment_procedures(MODULE_SOURCE)
        assert "Exit Sub" in procedures[1]

    def test_without_visibility(self) -> None:
        source = "Sub Main()\n    Run\nEnd Sub\n"
        assert segment_procedures(source) == ["Sub Main()\n    Run\nEnd Sub"]

    def test_case_insensitive(self) -> None:
        source = "public function lower() as string\nend function\n"
        assert len(segment_procedures(source)) == 1

    def test_siblings_not_merged(self) -> None:
        source = textwrap.dedent("""\
            Sub First()
            End Sub
            Sub Second()
            End Sub
        """)
        procedures = segment_procedures(source)
        assert len(procedures) == 2
        assert "Second" not in procedures[0]

    def test_property_accessors(self) -> None:
        source = textwrap.dedent("""\
            Private mName As String

            Public Property Get Name() As String
                Name = mName
            End Property

            Public Property Let Name(ByVal value As String)
                mName = value
            End Property

            Public Property Set Target(ByVal value As Object)
            End Property
        """)
        procedures = segment_procedures(source)
        assert len(procedures) == 3
        assert all(p.endswith("End Property") for p in procedures)
        assert procedures[1].startswith("Public Property Let Name(")

    def test_closing_keyword_matches_kind(self) -> None:
        source = textwrap.dedent("""\
            Function Outer() As Long
                If True Then
                End If
            End Function
        """)
        procedures = segment_procedures(source)
        assert procedures[0].endswith("End Function")

    def test_declare_statement_skipped(self) -> None:
        source = textwrap.dedent("""\
            Private Declare PtrSafe Function GetTickCount Lib "kernel32" () As Long

            Public Function Elapsed() As Long
                Elapsed = GetTickCount()
            End Function
        """)
        procedures = segment_procedures(source)
        assert len(procedures) == 1
        assert procedures[0].startswith("Public Function Elapsed(")

    def test_keyword_must_be_whole_word(self) -> None:
        source = "' Subtotal(rows) is computed below\nSub Total()\nEnd Sub\n"
        procedures = segment_procedures(source)
        assert procedures == ["Sub Total()\nEnd Sub"]

    def test_multiline_parameter_list(self) -> None:
        source = textwrap.dedent("""\
            Public Sub Configure(ByVal host As String, _
                                 ByVal port As Long)
            End Sub
        """)
        assert len(segment_procedures(source)) == 1


class TestStripProcedures:
    """Tests for computing the module text outside procedures."""

    def test_removes_all_procedures(self) -> None:
        remainder = strip_procedures(MODULE_SOURCE)
        assert "Function" not in remainder
        assert "End Sub" not in remainder
        assert "'@Author: Jane Doe" in remainder
        assert "'@Todo: more helpers" in remainder

    def test_no_procedures_returns_source(self) -> None:
        source = "'@Author: Jane\nOption Explicit\n"
        assert strip_procedures(source) == source

    def test_spans_match_segments(self) -> None:
        spans = procedure_spans(MODULE_SOURCE)
        segments = segment_procedures(MODULE_SOURCE)
        assert [MODULE_SOURCE[s:e] for s, e in spans] == segments


class TestParameterListSpan:
    """Tests for locating a procedure's parameter list."""

    def test_simple(self) -> None:
        text = "Sub Foo(a, b)\nEnd Sub"
        start, end = parameter_list_span(text)
        assert text[start : end + 1] == "(a, b)"

    def test_array_parameter_kept_inside(self) -> None:
        text = "Function Sum(values() As Long) As Long\nEnd Function"
        start, end = parameter_list_span(text)
        assert text[start : end + 1] == "(values() As Long)"

    def test_parentheses_in_string_default(self) -> None:
        text = 'Sub Log(Optional prefix As String = ")")\nEnd Sub'
        start, end = parameter_list_span(text)
        assert text[end + 1 :] == "\nEnd Sub"

    def test_missing_parenthesis(self) -> None:
        with pytest.raises(DeclarationMalformedError):
            parameter_list_span("Sub Foo\nEnd Sub")

    def test_unterminated(self) -> None:
        with pytest.raises(DeclarationMalformedError, match="unterminated"):
            parameter_list_span("Sub Foo(a As Long\nEnd Sub")
