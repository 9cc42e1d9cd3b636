"""Helper utilities for constructing discovery documents in tests."""

from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional, Sequence


def descriptor(
    name: str,
    mwtype: str,
    mwsize: Optional[Sequence[int]] = None,
    *,
    typedef: Optional[str] = None,
    help: Optional[str] = None,
) -> Dict[str, Any]:
    """Return a value descriptor as it appears in decoded discovery JSON."""
    data: Dict[str, Any] = {"name": name, "mwtype": mwtype}
    if mwsize is not None:
        data["mwsize"] = list(mwsize)
    if typedef is not None:
        data["typedef"] = typedef
    if help is not None:
        data["help"] = help
    return data


class DiscoveryBuilder:
    """Builds decoded discovery documents archive by archive."""

    def __init__(self) -> None:
        self._archives: Dict[str, Dict[str, Any]] = {}

    def archive(self, name: str) -> Dict[str, Any]:
        return self._archives.setdefault(
            name, {"archiveSchemaVersion": "1.0.0", "functions": {}, "typedefs": {}}
        )

    def function(
        self,
        archive: str,
        name: str,
        inputs: Iterable[Dict[str, Any]] = (),
        outputs: Iterable[Dict[str, Any]] = (),
        *,
        help: Optional[str] = None,
    ) -> "DiscoveryBuilder":
        signature: Dict[str, Any] = {"inputs": list(inputs), "outputs": list(outputs)}
        if help is not None:
            signature["help"] = help
        self.archive(archive)["functions"][name] = {"signatures": signature}
        return self

    def struct(
        self, archive: str, name: str, fields: List[Dict[str, Any]], *, help: Optional[str] = None
    ) -> "DiscoveryBuilder":
        typedef: Dict[str, Any] = {"fields": fields}
        if help is not None:
            typedef["help"] = help
        self.archive(archive)["typedefs"][name] = typedef
        return self

    def cell(
        self, archive: str, name: str, elements: List[Dict[str, Any]], *, help: Optional[str] = None
    ) -> "DiscoveryBuilder":
        typedef: Dict[str, Any] = {"elements": elements}
        if help is not None:
            typedef["help"] = help
        self.archive(archive)["typedefs"][name] = typedef
        return self

    def build(self) -> Dict[str, Any]:
        return {"discoverySchemaVersion": "1.0.0", "archives": self._archives}


__all__ = ["DiscoveryBuilder", "descriptor"]
