"""Recursive translation of value descriptors into OpenAPI schema fragments.

Every function input, function output, struct field and cell element is
described by the same *wrapped value* schema: an object with an ``mwtype``
tag, an ``mwsize`` dimension vector and the ``mwdata`` payload. Structs and
cells expand their typedef into ``mwdata``, recursing back into
:meth:`ValueTranslator.add_value` for every field or element.

All methods write relative to the last line the caller wrote: they push the
current indentation on entry and pop it on exit.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator, List, Optional, Type, TypeVar

from ..config import GeneratorOptions, OpenAPIVersion
from ..discovery import CyclicTypedefError, DiscoveryError
from ..models import Archive, ContainerTypedef, MWType, RecordTypedef, ValueDescriptor
from ..yaml_writer import YamlWriter
from .scalars import add_scalar_type
from .snippets import add_description, add_example, quote

_T = TypeVar("_T", RecordTypedef, ContainerTypedef)


class ValueTranslator:
    """Writes wrapped-value schemas for the descriptors of one archive."""

    def __init__(self, y: YamlWriter, archive: Archive, options: GeneratorOptions) -> None:
        self.y = y
        self.archive = archive
        self.options = options
        self._active: List[str] = []

    @property
    def version(self) -> OpenAPIVersion:
        return self.options.openapi_version

    def add_value(self, descriptor: ValueDescriptor, *, title: Optional[str] = None) -> YamlWriter:
        """Write the ``{mwtype, mwsize, mwdata}`` schema for ``descriptor``."""
        y = self.y
        kind = descriptor.kind
        y.push()
        add_description(y, descriptor.help)
        y.write_line(f"title: {quote(descriptor.name if title is None else title)}")
        y.write_line("properties:")
        y.write_line("  mwtype:")
        y.write_line('    type: "string"')
        if not descriptor.is_variadic:
            y.write_line("    enum:")
            y.write_line(f"    - {quote(descriptor.mwtype)}")
        self._add_size(descriptor)
        y.write_line("  mwdata:").indent()
        if kind is MWType.STRUCT:
            self.add_struct(descriptor)
        elif kind is MWType.CELL:
            self.add_cell(descriptor)
        else:
            if kind is MWType.CHAR:
                add_example(y, self.version, '["string"]')
            y.write_line('    type: "array"')
            y.write_line("    items:").indent()
            add_scalar_type(y, kind)
            if descriptor.mwsize:
                self._add_item_count(descriptor.element_count, prefix="    ")
        return y.pop()

    def add_struct(self, parent: ValueDescriptor) -> YamlWriter:
        """Write the ``mwdata`` object for a struct descriptor.

        Each field becomes an array of wrapped values, one per element of the
        struct array. A sized parent fixes the length of every field array.
        """
        y = self.y
        y.push()
        if parent.typedef is None:
            y.write_line('type: "object"')
            return y.pop()
        with self._entering(parent) as typedef:
            record = self._expect(typedef, RecordTypedef, parent)
            y.write_line('type: "object"')
            add_description(y, record.help)
            y.write_line("properties:" if record.fields else "properties: {}")
            for field in record.fields:
                y.write_line(f"  {quote(field.name)}:")
                y.write_line('    type: "array"')
                y.write_line("    items:")
                y.write_line('      type: "object"')
                self.add_value(field)
                if parent.mwsize:
                    self._add_item_count(parent.element_count, prefix="    ")
        return y.pop()

    def add_cell(self, parent: ValueDescriptor) -> YamlWriter:
        """Write the ``mwdata`` array for a cell descriptor."""
        y = self.y
        y.push()
        y.write_line('type: "array"')
        if parent.typedef is None:
            y.write_line("items: {}")
        else:
            with self._entering(parent) as typedef:
                container = self._expect(typedef, ContainerTypedef, parent)
                if not container.elements:
                    raise DiscoveryError(
                        f"Cell typedef '{container.name}' in archive '{self.archive.name}' "
                        "has no elements"
                    )
                if not container.is_heterogeneous:
                    element = container.elements[0]
                    y.write_line("items:")
                    y.write_line('  type: "object"')
                    self.add_value(element, title=element.name or "1")
                elif self.version is OpenAPIVersion.V3_0_3:
                    y.write_line("items:")
                    add_description(y, container.help, prefix="  ")
                    y.write_line(f"  {self.options.heterogeneous_array.value}:")
                    self._add_elements(container, marker="  - ")
                else:
                    add_description(y, container.help)
                    y.write_line("prefixItems:")
                    self._add_elements(container, marker="- ")
                    y.write_line("items: false")
        if parent.mwsize:
            self._add_item_count(parent.element_count)
        return y.pop()

    def _add_elements(self, container: ContainerTypedef, *, marker: str) -> None:
        for position, element in enumerate(container.elements, start=1):
            self.y.write_line(f'{marker}type: "object"')
            self.add_value(element, title=element.name or str(position))

    def _add_size(self, descriptor: ValueDescriptor) -> None:
        y = self.y
        y.write_line("  mwsize:")
        y.write_line('    type: "array"')
        y.write_line("    items:")
        y.write_line('      type: "integer"')
        y.write_line('      format: "int64"')
        if descriptor.mwsize:
            y.write_line(f"      minimum: {min(descriptor.mwsize)}")
            y.write_line(f"      maximum: {max(descriptor.mwsize)}")
            self._add_item_count(len(descriptor.mwsize), prefix="    ")
            dims = ",".join(str(dim) for dim in descriptor.mwsize)
            add_example(y, self.version, f"[{dims}]")
        else:
            # Arrays always have at least two dimensions.
            y.write_line("    minItems: 2")
            if descriptor.kind is MWType.CHAR:
                add_example(y, self.version, "[1,6]")

    def _add_item_count(self, count: int, prefix: str = "") -> None:
        self.y.write_line(f"{prefix}minItems: {count}")
        self.y.write_line(f"{prefix}maxItems: {count}")

    @contextmanager
    def _entering(self, parent: ValueDescriptor) -> Iterator[object]:
        name = parent.typedef or ""
        if name in self._active:
            raise CyclicTypedefError(self.archive.name, tuple(self._active) + (name,))
        typedef = self.archive.typedefs.get(name)
        if typedef is None:
            raise DiscoveryError(
                f"Typedef '{name}' used by '{parent.name}' is not defined in archive "
                f"'{self.archive.name}'"
            )
        self._active.append(name)
        try:
            yield typedef
        finally:
            self._active.pop()

    def _expect(self, typedef: object, expected: Type[_T], parent: ValueDescriptor) -> _T:
        if not isinstance(typedef, expected):
            raise DiscoveryError(
                f"Typedef '{parent.typedef}' used by '{parent.name}' in archive "
                f"'{self.archive.name}' does not describe a {parent.mwtype}"
            )
        return typedef


__all__ = ["ValueTranslator"]
