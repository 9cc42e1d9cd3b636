"""Small YAML fragments shared by the schema translator and the assembler."""

from __future__ import annotations

import json
import re
import textwrap
from typing import List, Optional

from ..config import OpenAPIVersion
from ..yaml_writer import YamlWriter

NO_DESCRIPTION = "No description provided"

# Characters outside the YAML printable set; the parser rejects the whole
# document when one of them appears unescaped.
_NON_PRINTABLE = re.compile(r"[^\t\n\r\x20-\x7e\x85\xa0-\ud7ff\ue000-\ufffd\U00010000-\U0010ffff]")
# Line breaks YAML folds inside double quotes are escaped as well.
_UNSAFE_IN_QUOTES = re.compile(r"[^\x20-\x7e\xa0-\u2027\u202a-\ud7ff\ue000-\ufffd\U00010000-\U0010ffff]")


def quote(value: object) -> str:
    """Return ``value`` as a double-quoted YAML scalar."""
    # JSON string escapes are a subset of YAML double-quoted escapes. JSON
    # leaves DEL, C1 controls and Unicode line separators raw.
    text = json.dumps(str(value), ensure_ascii=False)
    return _UNSAFE_IN_QUOTES.sub(lambda match: f"\\u{ord(match.group()):04x}", text)


def help_lines(help_text: Optional[str]) -> List[str]:
    # Literal blocks cannot carry escapes, so non-printable characters are dropped.
    text = _NON_PRINTABLE.sub("", help_text.expandtabs(4)) if help_text else ""
    if not text.strip():
        return [NO_DESCRIPTION]
    lines = [line.rstrip() for line in textwrap.dedent(text).splitlines()]
    while lines and not lines[0]:
        lines.pop(0)
    while lines and not lines[-1]:
        lines.pop()
    return lines


def add_help(y: YamlWriter, help_text: Optional[str]) -> YamlWriter:
    """Write help text two columns deeper than the last line written."""
    y.push(2)
    for line in help_lines(help_text):
        y.write_line(line)
    return y.pop()


def add_description(y: YamlWriter, help_text: Optional[str], prefix: str = "") -> YamlWriter:
    """Write a ``description`` literal block holding ``help_text``."""
    lines = help_lines(help_text)
    # An explicit indentation indicator is required when the first line is
    # itself indented, otherwise YAML infers the wrong block indentation.
    indicator = "2" if lines[0][:1].isspace() else ""
    y.write_line(f"{prefix}description: |{indicator}")
    return add_help(y, help_text)


def add_example(y: YamlWriter, version: OpenAPIVersion, value: str) -> YamlWriter:
    """Write an example (3.0.3) or a one-item examples list (3.1.0)."""
    y.push()
    if version is OpenAPIVersion.V3_0_3:
        y.write_line(f"example: {value}")
    else:
        y.write_line("examples:")
        y.write_line(f"- {value}")
    return y.pop()


__all__ = ["NO_DESCRIPTION", "add_description", "add_example", "add_help", "help_lines", "quote"]
