"""
Tests for dispatch construct rendering.
"""

import pytest
from jinja2 import TemplateNotFound

from genpp import ConfigError, GenppConfig, TypeTable
from genpp.config import DispatchConfig, MarkersConfig
from genpp.generators import DispatchGenerator
from genpp.parser import GenericBlock


@pytest.fixture
def block():
    return GenericBlock(loopvar="x.type", indent="  ", body_lines=["  generic *p = x.data;"])


class TestRender:
    """Rendered switch statement."""

    def test_full_text(self, block, small_table):
        text = DispatchGenerator().render(block, small_table)
        assert text == (
            "  switch (x.type) {\n"
            "  case 1:\n"
            "     {\n"
            "     long *p = x.data;\n"
            "     } break;\n"
            "  case 2:\n"
            "     {\n"
            "     float *p = x.data;\n"
            "     } break;\n"
            "  default:\n"
            '     croak("Not a known data type code=%d", x.type);\n'
            "  }"
        )

    def test_no_trailing_newline(self, block, small_table):
        assert DispatchGenerator().render(block, small_table).endswith("}")

    def test_no_html_escaping(self, small_table):
        block = GenericBlock(loopvar="a->b", body_lines=['if (x < y && s == "q") {}'])
        text = DispatchGenerator().render(block, small_table)
        assert "switch (a->b) {" in text
        assert '   if (x < y && s == "q") {}\n' in text

    def test_symbolic_tags(self, block):
        table = TypeTable.from_pairs([("PDL_B", "unsigned char")])
        text = DispatchGenerator().render(block, table)
        assert "  case PDL_B:\n" in text
        assert "     unsigned char *p = x.data;\n" in text


class TestCases:
    """Per-type specialization."""

    def test_cases_follow_table(self, block, small_table):
        cases = DispatchGenerator().cases(block, small_table)
        assert [c.tag for c in cases] == [1, 2]
        assert cases[1].lines == ["  float *p = x.data;"]

    def test_block_not_modified(self, block, small_table):
        DispatchGenerator().cases(block, small_table)
        assert block.body_lines == ["  generic *p = x.data;"]

    def test_custom_placeholder(self, small_table):
        config = GenppConfig(markers=MarkersConfig(placeholder="TYPE"))
        block = GenericBlock(loopvar="t", body_lines=["TYPE v; generic w;"])
        cases = DispatchGenerator(config).cases(block, small_table)
        assert cases[0].lines == ["long v; generic w;"]


class TestUnknownTag:
    """Default-case statement."""

    def test_custom_statement(self, block, small_table):
        config = GenppConfig(dispatch=DispatchConfig(
            unknown_tag='barf("bad type %d", (int)({{ loopvar }}));'
        ))
        text = DispatchGenerator(config).render(block, small_table)
        assert '     barf("bad type %d", (int)(x.type));\n' in text

    def test_syntax_error(self, block, small_table):
        config = GenppConfig(dispatch=DispatchConfig(unknown_tag="croak({{ loopvar );"))
        with pytest.raises(ConfigError):
            DispatchGenerator(config).render(block, small_table)

    def test_undefined_variable(self, block, small_table):
        config = GenppConfig(dispatch=DispatchConfig(unknown_tag="croak({{ tag }});"))
        with pytest.raises(ConfigError):
            DispatchGenerator(config).render(block, small_table)

    def test_package_template_errors_propagate(self, block, small_table, monkeypatch):
        """Only the configured statement is reported as a configuration error."""
        monkeypatch.setattr("genpp.generators.dispatch.TEMPLATE_NAME", "missing.c.j2")
        with pytest.raises(TemplateNotFound):
            DispatchGenerator().render(block, small_table)
