"""
Tests for marker syntax.
"""

import pytest

from genpp import ConfigError
from genpp.parser import GenericBlock, MarkerSyntax, SourceLocation


class TestOpenMarker:
    """Open marker recognition."""

    def test_indent_and_loopvar(self):
        m = MarkerSyntax().find_open("    GENERICLOOP(x.datatype)\n")
        assert m.indent == "    "
        assert m.loopvar == "x.datatype"
        assert m.start == 0
        assert m.keyword_start == 4

    def test_leading_code(self):
        text = "foo();  GENERICLOOP(t) rest"
        m = MarkerSyntax().find_open(text)
        assert text[:m.start] == "foo();"
        assert m.indent == "  "
        assert text[m.end:] == " rest"

    def test_optional_semicolon(self):
        text = "GENERICLOOP(t) ;x"
        m = MarkerSyntax().find_open(text)
        assert text[m.end:] == "x"

    def test_requires_parenthesis(self):
        syntax = MarkerSyntax()
        assert syntax.find_open("GENERICLOOP x\n") is None
        assert syntax.find_open("GENERICLOOPS(x)\n") is None
        assert syntax.find_open("MY_GENERICLOOP(x)\n") is None

    def test_close_keyword_is_not_open(self):
        assert MarkerSyntax().find_open("ENDGENERICLOOP(x)\n") is None

    def test_empty_loopvar(self):
        assert MarkerSyntax().find_open("GENERICLOOP()").loopvar == ""

    def test_nested_loopvar(self):
        """The argument runs to the matching parenthesis at any depth."""
        text = "GENERICLOOP(T(f(x))); rest"
        m = MarkerSyntax().find_open(text)
        assert m.loopvar == "T(f(x))"
        assert m.balanced
        assert text[m.end:] == " rest"

    def test_unbalanced_loopvar(self):
        m = MarkerSyntax().find_open("  GENERICLOOP(a(b)\n")
        assert not m.balanced
        assert m.loopvar == "a(b)"
        assert m.indent == "  "


class TestCloseMarker:
    """Close marker recognition."""

    def test_position(self):
        text = "  x; ENDGENERICLOOP; y"
        m = MarkerSyntax().find_close(text)
        assert text[:m.start] == "  x; "
        assert text[m.end:] == " y"

    def test_word_boundaries(self):
        syntax = MarkerSyntax()
        assert syntax.find_close("ENDGENERICLOOPS\n") is None
        assert syntax.find_close("XENDGENERICLOOP\n") is None

    def test_has_marker(self):
        syntax = MarkerSyntax()
        assert syntax.has_marker("GENERICLOOP(t)\n")
        assert syntax.has_marker("ENDGENERICLOOP\n")
        assert not syntax.has_marker("GENERICLOOPS\n")
        assert not syntax.has_marker("plain\n")


class TestSpecialize:
    """Placeholder substitution."""

    def test_whole_words(self):
        syntax = MarkerSyntax()
        assert syntax.specialize("generic *p, generic_q, ngeneric", "float") == "float *p, generic_q, ngeneric"

    def test_spelling_taken_literally(self):
        assert MarkerSyntax().specialize("generic x;", r"my\1type") == r"my\1type x;"

    def test_custom_placeholder(self):
        assert MarkerSyntax(placeholder="T").specialize("T t; generic g;", "int") == "int t; generic g;"


class TestValidation:
    """Keyword validation."""

    @pytest.mark.parametrize("kwargs", [
        {"open_keyword": "GENERIC LOOP"},
        {"close_keyword": ""},
        {"placeholder": "gen-eric"},
        {"open_keyword": "SAME", "close_keyword": "SAME"},
    ])
    def test_invalid(self, kwargs):
        with pytest.raises(ConfigError):
            MarkerSyntax(**kwargs)

    def test_equality(self):
        assert MarkerSyntax() == MarkerSyntax()
        assert MarkerSyntax(placeholder="T") != MarkerSyntax()


class TestGenericBlock:
    """Body capture rules."""

    def test_whole_lines_kept(self):
        block = GenericBlock(loopvar="t")
        block.add_line("a;\n")
        block.add_line("\n")
        block.add_line("b;\r\n")
        assert block.body_lines == ["a;", "", "b;"]

    def test_blank_fragments_dropped(self):
        block = GenericBlock(loopvar="t")
        block.add_fragment("\n")
        block.add_fragment("   ")
        assert block.body_lines == []
        block.add_fragment(" x; ")
        assert block.body_lines == [" x; "]

    def test_location_str(self):
        assert str(SourceLocation("a.g", 3)) == "a.g:3"
        assert str(SourceLocation(None, 3)) == "line 3"
