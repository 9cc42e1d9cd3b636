"""Decoding of JSON-decoded discovery documents into models."""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional, Tuple

from .models import (
    Archive,
    ContainerTypedef,
    Discovery,
    Function,
    RecordTypedef,
    Signature,
    Typedef,
    ValueDescriptor,
    Variadic,
)


class DiscoveryError(RuntimeError):
    """Raised when a discovery document cannot be translated."""


class CyclicTypedefError(DiscoveryError):
    """Raised when a typedef (directly or indirectly) contains itself."""

    def __init__(self, archive: str, chain: Tuple[str, ...]) -> None:
        super().__init__(
            f"Typedef '{chain[-1]}' in archive '{archive}' refers back to itself: "
            + " -> ".join(chain)
        )
        self.archive = archive
        self.chain = chain


def parse_discovery(data: Any) -> Discovery:
    """Build a :class:`Discovery` from a decoded JSON document.

    Only the top-level shape is checked: anything other than a mapping is
    rejected. Missing optional metadata (help text, sizes, typedefs) is
    tolerated and left empty.
    """
    if not isinstance(data, Mapping):
        raise DiscoveryError(
            "Expected the discovery document to be a mapping, got "
            f"{type(data).__name__}. Decode the JSON text (for example with json.loads) first."
        )

    archives: Dict[str, Archive] = {}
    for archive_name, archive_data in _as_dict(data.get("archives")).items():
        archives[str(archive_name)] = _parse_archive(str(archive_name), _as_dict(archive_data))

    return Discovery(
        archives=archives,
        schema_version=_as_str(data.get("discoverySchemaVersion")),
    )


def _parse_archive(name: str, data: Mapping[str, Any]) -> Archive:
    functions: Dict[str, Function] = {}
    for function_name, function_data in _as_dict(data.get("functions")).items():
        signature = _first_mapping(_as_dict(function_data).get("signatures"))
        functions[str(function_name)] = Function(
            name=str(function_name),
            signature=_parse_signature(signature),
        )

    typedefs: Dict[str, Typedef] = {}
    for typedef_name, typedef_data in _as_dict(data.get("typedefs")).items():
        typedef = _parse_typedef(str(typedef_name), _as_dict(typedef_data))
        if typedef is not None:
            typedefs[str(typedef_name)] = typedef

    return Archive(name=name, functions=functions, typedefs=typedefs)


def _parse_signature(data: Mapping[str, Any]) -> Signature:
    return Signature(
        inputs=_parse_descriptors(data.get("inputs")),
        outputs=_parse_descriptors(data.get("outputs")),
        help=_as_help(data.get("help")),
    )


def _parse_typedef(name: str, data: Mapping[str, Any]) -> Optional[Typedef]:
    help_text = _as_help(data.get("help"))
    if "fields" in data:
        return RecordTypedef(name=name, fields=_parse_descriptors(data.get("fields")), help=help_text)
    if "elements" in data:
        return ContainerTypedef(
            name=name, elements=_parse_descriptors(data.get("elements")), help=help_text
        )
    return None


def _parse_descriptors(value: Any) -> Tuple[ValueDescriptor, ...]:
    return tuple(_parse_descriptor(item) for item in _as_list(value) if isinstance(item, Mapping))


def _parse_descriptor(data: Mapping[str, Any]) -> ValueDescriptor:
    name = _as_str(data.get("name")) or ""
    return ValueDescriptor(
        name=name,
        mwtype=_as_str(data.get("mwtype")) or "",
        mwsize=_as_size(data.get("mwsize")),
        typedef=_as_str(data.get("typedef")),
        help=_as_help(data.get("help")),
        variadic=Variadic.from_name(name),
    )


def _first_mapping(value: Any) -> Mapping[str, Any]:
    for item in _as_list(value):
        if isinstance(item, Mapping):
            return item
    return {}


def _as_dict(value: Any) -> Mapping[str, Any]:
    return value if isinstance(value, Mapping) else {}


def _as_list(value: Any) -> List[Any]:
    # A lone object stands for a one-element list.
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return list(value)
    return [value]


def _as_str(value: Any) -> Optional[str]:
    if isinstance(value, bool):
        return None
    return str(value) if isinstance(value, (str, int, float)) else None


def _as_help(value: Any) -> Optional[str]:
    text = _as_str(value)
    if text is None or not text.strip():
        return None
    return text


def _as_size(value: Any) -> Tuple[int, ...]:
    sizes: List[int] = []
    for item in _as_list(value):
        if isinstance(item, bool):
            continue
        if isinstance(item, int):
            sizes.append(item)
        elif isinstance(item, float) and item.is_integer():
            sizes.append(int(item))
    return tuple(sizes)


__all__ = ["CyclicTypedefError", "DiscoveryError", "parse_discovery"]
