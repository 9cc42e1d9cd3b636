"""Configuration loading for oasgen (.oasgen.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Sequence

import yaml

CONFIG_FILENAME = ".oasgen.yml"


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


class OpenAPIVersion(str, Enum):
    """Supported OpenAPI document versions."""

    V3_0_3 = "3.0.3"
    V3_1_0 = "3.1.0"


class HeterogeneousArraySpecifier(str, Enum):
    """Keyword used for alternatives groups in 3.0.3 documents."""

    ANY_OF = "anyOf"
    ONE_OF = "oneOf"


DEFAULT_SERVERS = ("http://localhost:9910/",)
DEFAULT_AUTHORIZATION_URL = "https://www.example.com/auth"
DEFAULT_TOKEN_URL = "https://www.example.com/token"
DEFAULT_DISCOVERY_URL = "http://localhost:9910/api/discovery"


@dataclass(frozen=True)
class OAuthConfig:
    """OAuth authorization-code settings included in generated documents."""

    enabled: bool = False
    authorization_url: str = DEFAULT_AUTHORIZATION_URL
    token_url: str = DEFAULT_TOKEN_URL


@dataclass(frozen=True)
class GeneratorOptions:
    """Settings that shape a generated OpenAPI document."""

    openapi_version: OpenAPIVersion = OpenAPIVersion.V3_0_3
    version: str = "1.0.0"
    servers: tuple[str, ...] = DEFAULT_SERVERS
    heterogeneous_array: HeterogeneousArraySpecifier = HeterogeneousArraySpecifier.ANY_OF
    async_interface: bool = False
    oauth: OAuthConfig = field(default_factory=OAuthConfig)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "GeneratorOptions":
        """Build options from a (possibly partial) mapping, validating enum values."""
        defaults = cls()
        oauth_data = _as_dict(data.get("oauth"))
        oauth = OAuthConfig(
            enabled=_as_bool(oauth_data.get("enabled")) or False,
            authorization_url=_as_str(oauth_data.get("authorization_url"))
            or DEFAULT_AUTHORIZATION_URL,
            token_url=_as_str(oauth_data.get("token_url")) or DEFAULT_TOKEN_URL,
        )
        servers = _as_str_list(data.get("servers"))
        return cls(
            openapi_version=parse_openapi_version(
                data.get("openapi_version", defaults.openapi_version.value)
            ),
            version=_as_str(data.get("version")) or defaults.version,
            servers=tuple(servers) if servers else defaults.servers,
            heterogeneous_array=parse_heterogeneous_array(
                data.get("heterogeneous_array", defaults.heterogeneous_array.value)
            ),
            async_interface=_as_bool(data.get("async")) or False,
            oauth=oauth,
        )

    def with_overrides(self, **overrides: Any) -> "GeneratorOptions":
        """Return a copy with every non-None override applied."""
        changes = {key: value for key, value in overrides.items() if value is not None}
        return replace(self, **changes)


@dataclass(frozen=True)
class SourceConfig:
    """Where the live discovery document is fetched from."""

    url: str = DEFAULT_DISCOVERY_URL
    timeout: float = 30.0


@dataclass
class OasGenConfig:
    """Represents the settings defined in .oasgen.yml."""

    root: Path
    options: GeneratorOptions = field(default_factory=GeneratorOptions)
    source: SourceConfig = field(default_factory=SourceConfig)


def parse_openapi_version(value: Any) -> OpenAPIVersion:
    try:
        return OpenAPIVersion(str(value))
    except ValueError as exc:
        choices = ", ".join(member.value for member in OpenAPIVersion)
        raise ConfigError(f"Unsupported OpenAPI version '{value}' (expected one of {choices})") from exc


def parse_heterogeneous_array(value: Any) -> HeterogeneousArraySpecifier:
    try:
        return HeterogeneousArraySpecifier(str(value))
    except ValueError as exc:
        choices = ", ".join(member.value for member in HeterogeneousArraySpecifier)
        raise ConfigError(
            f"Unsupported heterogeneous array specifier '{value}' (expected one of {choices})"
        ) from exc


def load_config(config_path: Path) -> OasGenConfig:
    """Load configuration from disk."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return OasGenConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    options = GeneratorOptions.from_mapping(data)

    discovery_data = _as_dict(data.get("discovery"))
    source = SourceConfig(
        url=_as_str(discovery_data.get("url")) or DEFAULT_DISCOVERY_URL,
        timeout=_as_float(discovery_data.get("timeout")) or SourceConfig.timeout,
    )

    return OasGenConfig(root=root, options=options, source=source)


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Any:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded or {}


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float, bool)) else None


def _as_float(value: Any) -> Optional[float]:
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value)
        except ValueError:
            return None
    return None


def _as_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "yes", "1"}:
            return True
        if lowered in {"false", "no", "0"}:
            return False
    return None


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float, bool))]
    return []
