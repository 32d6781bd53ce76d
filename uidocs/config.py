"""Configuration loading for uidocs (.uidocs.yml)."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Sequence

import yaml

CONFIG_FILENAME = ".uidocs.yml"

TOKEN_ENV_VARS = ("GITHUB_PERSONAL_ACCESS_TOKEN", "GITHUB_TOKEN")
LOCAL_PATH_ENV_VAR = "UIDOCS_LOCAL_PATH"

DEFAULT_THEME_FILES = [
    "createColors.ts",
    "createTypography.ts",
    "createSpacing.ts",
    "createShadows.ts",
    "createShape.ts",
    "zIndex.ts",
    "breakpoints.ts",
]


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class SourceConfig:
    """Where component files are read from."""

    local_path: Optional[Path] = None
    owner: str = "grafana"
    repo: str = "grafana"
    branch: str = "main"
    components_path: str = "packages/grafana-ui/src/components"
    themes_path: str = "packages/grafana-data/src/themes"
    theme_files: List[str] = field(default_factory=lambda: list(DEFAULT_THEME_FILES))
    request_timeout: float = 10.0
    token: Optional[str] = None


@dataclass
class CacheConfig:
    """TTL cache settings; a TTL of 0 keeps entries forever."""

    enabled: bool = True
    ttl_seconds: float = 3600.0
    source_ttl_seconds: float = 43200.0


@dataclass
class ServiceConfig:
    host: str = "127.0.0.1"
    port: int = 8000


@dataclass
class PresenterConfig:
    templates_dir: Optional[Path] = None


@dataclass
class UIDocsConfig:
    """Represents the settings defined in .uidocs.yml."""

    root: Path
    source: SourceConfig = field(default_factory=SourceConfig)
    cache: CacheConfig = field(default_factory=CacheConfig)
    service: ServiceConfig = field(default_factory=ServiceConfig)
    presenter: PresenterConfig = field(default_factory=PresenterConfig)


def load_config(
    config_path: Path, *, environ: Optional[Mapping[str, str]] = None
) -> UIDocsConfig:
    """Load configuration from disk and apply environment overrides."""
    env = os.environ if environ is None else environ
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    data: Dict[str, Any] = {}
    if config_file.exists():
        data = _read_config(config_file)
        if not isinstance(data, dict):
            raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    config = UIDocsConfig(
        root=root,
        source=_load_source(_as_dict(data.get("source")), root),
        cache=_load_cache(_as_dict(data.get("cache"))),
        service=_load_service(_as_dict(data.get("service"))),
        presenter=_load_presenter(_as_dict(data.get("presenter")), root),
    )
    _apply_environment(config, env)
    return config


def _load_source(data: Dict[str, Any], root: Path) -> SourceConfig:
    source = SourceConfig()
    local_path = _as_str(data.get("local_path"))
    if local_path:
        source.local_path = (root / local_path).resolve()
    source.owner = _as_str(data.get("owner")) or source.owner
    source.repo = _as_str(data.get("repo")) or source.repo
    source.branch = _as_str(data.get("branch")) or source.branch
    source.components_path = _as_str(data.get("components_path")) or source.components_path
    source.themes_path = _as_str(data.get("themes_path")) or source.themes_path
    theme_files = _as_str_list(data.get("theme_files"))
    if theme_files:
        source.theme_files = theme_files
    timeout = _as_float(data.get("request_timeout"))
    if timeout is not None:
        if timeout <= 0:
            raise ConfigError("source.request_timeout must be positive")
        source.request_timeout = timeout
    source.token = _as_str(data.get("token"))
    return source


def _load_cache(data: Dict[str, Any]) -> CacheConfig:
    cache = CacheConfig()
    enabled = _as_bool(data.get("enabled"))
    if enabled is not None:
        cache.enabled = enabled
    for key in ("ttl_seconds", "source_ttl_seconds"):
        value = _as_float(data.get(key))
        if value is None:
            continue
        if value < 0:
            raise ConfigError(f"cache.{key} must not be negative")
        setattr(cache, key, value)
    return cache


def _load_service(data: Dict[str, Any]) -> ServiceConfig:
    service = ServiceConfig()
    service.host = _as_str(data.get("host")) or service.host
    port = _as_int(data.get("port"))
    if port is not None:
        service.port = port
    return service


def _load_presenter(data: Dict[str, Any], root: Path) -> PresenterConfig:
    templates_dir = _as_str(data.get("templates_dir"))
    return PresenterConfig(templates_dir=root / templates_dir if templates_dir else None)


def _apply_environment(config: UIDocsConfig, env: Mapping[str, str]) -> None:
    for name in TOKEN_ENV_VARS:
        token = env.get(name)
        if token:
            config.source.token = token
            break
    local_path = env.get(LOCAL_PATH_ENV_VAR)
    if local_path:
        config.source.local_path = Path(local_path).expanduser().resolve()


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded if loaded is not None else {}


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float, bool)) else None


def _as_float(value: Any) -> Optional[float]:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value)
        except ValueError:
            return None
    return None


def _as_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value)
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


__all__ = [
    "CONFIG_FILENAME",
    "CacheConfig",
    "ConfigError",
    "PresenterConfig",
    "ServiceConfig",
    "SourceConfig",
    "UIDocsConfig",
    "load_config",
]
