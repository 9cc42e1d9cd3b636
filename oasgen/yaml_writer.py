"""Line-oriented YAML writer with an indent stack.

Lines are written with their *visible* indentation, so the shape of the
document can be read straight from the calling code::

    y = YamlWriter()
    y.write_line("abc:")
    y.write_line("  def: Hello")

Every call to :meth:`YamlWriter.write_line` records the indentation of the
line it just wrote. :meth:`YamlWriter.push` puts that indentation (plus an
optional extra offset) on the stack, and subsequent lines are prefixed with
the top of the stack. A helper that emits a sub-document can therefore push,
write its lines starting at column zero, and pop::

    def add_jkl(y):
        y.push()
        y.write_line("jkl:")
        y.write_line("  mno: Example")
        y.pop()

:meth:`YamlWriter.indent` and :meth:`YamlWriter.unindent` are only needed
when a sub-document must land one level deeper than the last line written.
"""

from __future__ import annotations

from typing import List

_INDENT_STEP = 2


class YamlWriter:
    """Append-only text buffer that nests fragments through an indent stack."""

    def __init__(self) -> None:
        self._buffer: List[str] = []
        self.current_indent = 0
        self._stack: List[int] = [0]

    @property
    def depth(self) -> int:
        """Number of pushed entries above the base entry."""
        return len(self._stack) - 1

    def write(self, text: str) -> "YamlWriter":
        """Append ``text`` verbatim, without indentation or newline."""
        self._buffer.append(text)
        return self

    def write_line(self, text: str) -> "YamlWriter":
        """Write ``text`` as a full line, prefixed with the stack indent."""
        self.current_indent = _count_indent(text)
        self._buffer.append(" " * self._stack[-1] + text + "\n")
        return self

    def push(self, extra: int = 0) -> "YamlWriter":
        """Push the indentation of the last line (plus ``extra``) on the stack."""
        self._stack.append(self._stack[-1] + self.current_indent + extra)
        return self

    def pop(self) -> "YamlWriter":
        if len(self._stack) == 1:
            raise IndexError("Cannot pop the base entry of the indent stack")
        self._stack.pop()
        return self

    def indent(self) -> "YamlWriter":
        self.current_indent += _INDENT_STEP
        return self

    def unindent(self) -> "YamlWriter":
        self.current_indent -= _INDENT_STEP
        return self

    def to_string(self) -> str:
        return "".join(self._buffer)

    def __str__(self) -> str:
        return self.to_string()


def _count_indent(text: str) -> int:
    # Sequence markers count as indentation so that "- key: value" nests
    # its siblings under "key".
    for index, char in enumerate(text):
        if not (char.isspace() or char == "-"):
            return index
    return 0


__all__ = ["YamlWriter"]
