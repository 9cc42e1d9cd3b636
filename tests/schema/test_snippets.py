"""Tests for oasgen.schema.snippets."""

from __future__ import annotations

import yaml

from oasgen.config import OpenAPIVersion
from oasgen.schema.snippets import NO_DESCRIPTION, add_description, add_example, add_help, quote
from oasgen.yaml_writer import YamlWriter


def test_add_help_without_text_writes_placeholder_with_indent() -> None:
    y = YamlWriter()
    add_help(y, None)
    assert y.to_string() == f"  {NO_DESCRIPTION}\n"


def test_add_help_writes_text_lines() -> None:
    y = YamlWriter()
    add_help(y, "help text")
    assert y.to_string() == "  help text\n"


def test_add_description_dedents_help() -> None:
    y = YamlWriter()
    add_description(y, "  first line\n  second line\n")
    assert y.to_string() == "description: |\n  first line\n  second line\n"
    assert yaml.safe_load(y.to_string()) == {"description": "first line\nsecond line\n"}


def test_add_description_uses_indicator_for_indented_first_line() -> None:
    y = YamlWriter()
    y.write_line("schema:")
    y.push(2)
    add_description(y, " MYFUN does things.\nUsage: out = myFun(in)")
    y.pop()

    assert "  description: |2\n" in y.to_string()
    loaded = yaml.safe_load(y.to_string())
    assert loaded["schema"]["description"] == " MYFUN does things.\nUsage: out = myFun(in)\n"


def test_add_example_depends_on_version() -> None:
    old = YamlWriter()
    old.write_line("  id:")
    add_example(old, OpenAPIVersion.V3_0_3, '"abc"')
    assert old.to_string() == '  id:\n  example: "abc"\n'

    new = YamlWriter()
    new.write_line("  id:")
    add_example(new, OpenAPIVersion.V3_1_0, '"abc"')
    assert new.to_string() == '  id:\n  examples:\n  - "abc"\n'


def test_quote_escapes_for_yaml() -> None:
    value = 'say "hi": #1'
    assert yaml.safe_load(f"key: {quote(value)}") == {"key": value}


def test_add_description_drops_non_printable_characters() -> None:
    y = YamlWriter()
    add_description(y, "bell\x07 del\x7f")
    assert yaml.safe_load(y.to_string()) == {"description": "bell del\n"}


def test_add_description_of_control_characters_only_uses_placeholder() -> None:
    y = YamlWriter()
    add_description(y, "\x07\x7f")
    assert yaml.safe_load(y.to_string()) == {"description": f"{NO_DESCRIPTION}\n"}


def test_quote_escapes_characters_yaml_rejects_or_folds() -> None:
    value = "bell\x07 del\x7f nel\x85 sep\u2028end"
    loaded = yaml.safe_load(f"key: {quote(value)}\n")
    assert loaded == {"key": value}
