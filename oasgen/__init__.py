"""Generate OpenAPI documents from execution server discovery documents."""

from .config import GeneratorOptions, HeterogeneousArraySpecifier, OpenAPIVersion
from .discovery import CyclicTypedefError, DiscoveryError, parse_discovery
from .generator import OpenAPIGenerator
from .yaml_writer import YamlWriter

__all__ = [
    "CyclicTypedefError",
    "DiscoveryError",
    "GeneratorOptions",
    "HeterogeneousArraySpecifier",
    "OpenAPIGenerator",
    "OpenAPIVersion",
    "YamlWriter",
    "parse_discovery",
]
