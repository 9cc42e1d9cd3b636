"""Mapping of primitive value-type tags to OpenAPI type fragments."""

from __future__ import annotations

from typing import Dict, Optional, Tuple

from ..models import MWType
from ..yaml_writer import YamlWriter

_OBJECT_FALLBACK: Tuple[str, ...] = ('type: "object"',)


def _integer(tag: MWType) -> Tuple[str, ...]:
    return ('type: "integer"', f'format: "{tag.value}"')


# Keyed by every MWType member; tests assert the table stays exhaustive.
SCALAR_SCHEMAS: Dict[MWType, Tuple[str, ...]] = {
    MWType.CHAR: ('type: "string"',),
    MWType.STRING: ('type: "string"',),
    MWType.DOUBLE: ('type: "number"', 'format: "double"'),
    MWType.SINGLE: ('type: "number"', 'format: "float"'),
    MWType.LOGICAL: ('type: "boolean"',),
    MWType.INT8: _integer(MWType.INT8),
    MWType.UINT8: _integer(MWType.UINT8),
    MWType.INT16: _integer(MWType.INT16),
    MWType.UINT16: _integer(MWType.UINT16),
    MWType.INT32: _integer(MWType.INT32),
    MWType.UINT32: _integer(MWType.UINT32),
    MWType.INT64: _integer(MWType.INT64),
    MWType.UINT64: _integer(MWType.UINT64),
    # Markers only; struct and cell data is expanded by the translator.
    MWType.STRUCT: ('type: "struct"',),
    MWType.CELL: ('type: "cell"',),
}


def scalar_schema(kind: Optional[MWType]) -> Tuple[str, ...]:
    """Return the schema lines for ``kind``; unknown tags map to a plain object."""
    if kind is None:
        return _OBJECT_FALLBACK
    return SCALAR_SCHEMAS.get(kind, _OBJECT_FALLBACK)


def add_scalar_type(y: YamlWriter, kind: Optional[MWType]) -> YamlWriter:
    """Write the scalar schema for ``kind`` nested under the last line written."""
    y.push()
    for line in scalar_schema(kind):
        y.write_line(line)
    return y.pop()


__all__ = ["SCALAR_SCHEMAS", "add_scalar_type", "scalar_schema"]
