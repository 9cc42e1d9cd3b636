"""Core data models for discovery documents."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Optional, Tuple, Union


class MWType(str, Enum):
    """Primitive value-type tags used by the discovery format."""

    CHAR = "char"
    STRING = "string"
    DOUBLE = "double"
    SINGLE = "single"
    LOGICAL = "logical"
    INT8 = "int8"
    UINT8 = "uint8"
    INT16 = "int16"
    UINT16 = "uint16"
    INT32 = "int32"
    UINT32 = "uint32"
    INT64 = "int64"
    UINT64 = "uint64"
    STRUCT = "struct"
    CELL = "cell"

    @classmethod
    def lookup(cls, value: str) -> Optional["MWType"]:
        """Return the member for ``value`` or None for an unknown tag."""
        try:
            return cls(value)
        except ValueError:
            return None


class Variadic(Enum):
    """Marks the reserved variable-argument descriptors."""

    NONE = ""
    INPUT = "varargin"
    OUTPUT = "varargout"

    @classmethod
    def from_name(cls, name: str) -> "Variadic":
        if name == cls.INPUT.value:
            return cls.INPUT
        if name == cls.OUTPUT.value:
            return cls.OUTPUT
        return cls.NONE


@dataclass(frozen=True)
class ValueDescriptor:
    """One typed, possibly size-constrained argument, field or element."""

    name: str
    mwtype: str
    mwsize: Tuple[int, ...] = ()
    typedef: Optional[str] = None
    help: Optional[str] = None
    variadic: Variadic = Variadic.NONE

    @property
    def kind(self) -> Optional[MWType]:
        return MWType.lookup(self.mwtype)

    @property
    def is_variadic(self) -> bool:
        return self.variadic is not Variadic.NONE

    @property
    def element_count(self) -> int:
        """Number of elements implied by ``mwsize`` (rows x cols x ...)."""
        return math.prod(self.mwsize)


@dataclass(frozen=True)
class Signature:
    """Positional inputs and outputs of a function."""

    inputs: Tuple[ValueDescriptor, ...] = ()
    outputs: Tuple[ValueDescriptor, ...] = ()
    help: Optional[str] = None

    @property
    def has_variadic_input(self) -> bool:
        return bool(self.inputs) and self.inputs[-1].variadic is Variadic.INPUT

    @property
    def has_variadic_output(self) -> bool:
        return bool(self.outputs) and self.outputs[-1].variadic is Variadic.OUTPUT


@dataclass(frozen=True)
class Function:
    name: str
    signature: Signature


@dataclass(frozen=True)
class RecordTypedef:
    """Struct-like typedef: an ordered set of named fields."""

    name: str
    fields: Tuple[ValueDescriptor, ...]
    help: Optional[str] = None


@dataclass(frozen=True)
class ContainerTypedef:
    """Cell-like typedef: one element (homogeneous) or several (heterogeneous)."""

    name: str
    elements: Tuple[ValueDescriptor, ...]
    help: Optional[str] = None

    @property
    def is_heterogeneous(self) -> bool:
        return len(self.elements) > 1


Typedef = Union[RecordTypedef, ContainerTypedef]


@dataclass(frozen=True)
class Archive:
    """Deployable unit grouping functions and the typedefs they reference."""

    name: str
    functions: Dict[str, Function] = field(default_factory=dict)
    typedefs: Dict[str, Typedef] = field(default_factory=dict)


@dataclass(frozen=True)
class Discovery:
    """Normalized view of a discovery document."""

    archives: Dict[str, Archive] = field(default_factory=dict)
    schema_version: Optional[str] = None

    @property
    def function_count(self) -> int:
        return sum(len(archive.functions) for archive in self.archives.values())
