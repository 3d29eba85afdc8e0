"""Configuration loading pipeline."""

from __future__ import annotations

import importlib
import json
import os
from pathlib import Path
from types import ModuleType
from typing import Any, Callable, Dict, Mapping, cast

from platformdirs import user_config_dir

from .schema import GelfConfig, build_config, default_config

try:  # pragma: no cover
    import tomllib  # type: ignore[attr-defined]
except ModuleNotFoundError:  # pragma: no cover
    import tomli as tomllib  # type: ignore[no-redef]

try:  # pragma: no cover
    yaml_module = importlib.import_module("yaml")
except ModuleNotFoundError:  # pragma: no cover
    yaml_module = None

yaml: ModuleType | None = yaml_module

__all__ = ["load_configuration"]

_APP_NAME = "podgelf"
_ENV_PREFIX = "PODGELF__"
_CONFIG_FILENAMES = ("podgelf.toml", "podgelf.yaml", "podgelf.yml")


def _read_toml(path: Path) -> Dict[str, Any]:
    with path.open("rb") as fh:
        return tomllib.load(fh)


def _read_yaml(path: Path) -> Dict[str, Any]:
    if yaml is None:
        return {}
    loader = getattr(yaml, "safe_load", None)
    if not callable(loader):
        return {}
    yaml_loader = cast(Callable[[Any], Any], loader)
    with path.open("r", encoding="utf-8") as fh:
        data = yaml_loader(fh)
    if isinstance(data, Mapping):
        return {str(key): value for key, value in data.items()}
    return {}


def _read_file(path: Path) -> Dict[str, Any]:
    if not path.is_file():
        return {}
    if path.suffix == ".toml":
        return _read_toml(path)
    return _read_yaml(path)


def _merge(base: Dict[str, Any], incoming: Mapping[str, Any]) -> Dict[str, Any]:
    for key, value in incoming.items():
        existing = base.get(key)
        if isinstance(value, Mapping):
            nested = dict(existing) if isinstance(existing, Mapping) else {}
            base[key] = _merge(nested, value)
        else:
            base[key] = value
    return base


def _load_directory(directory: Path) -> Dict[str, Any]:
    data: Dict[str, Any] = {}
    if not directory.is_dir():
        return data
    for filename in _CONFIG_FILENAMES:
        payload = _read_file(directory / filename)
        if payload:
            _merge(data, payload)
    return data


def _load_pyproject(directory: Path) -> Dict[str, Any]:
    path = directory / "pyproject.toml"
    if not path.is_file():
        return {}
    tool = _read_toml(path).get("tool", {})
    if not isinstance(tool, Mapping):
        return {}
    section = tool.get(_APP_NAME, {})
    if isinstance(section, Mapping):
        return {str(key): value for key, value in section.items()}
    return {}


def _coerce_value(value: str) -> Any:
    stripped = value.strip()
    lowered = stripped.lower()
    if lowered in {"true", "false"}:
        return lowered == "true"
    if lowered in {"", "none", "null"}:
        return None
    try:
        return int(stripped)
    except ValueError:
        try:
            return float(stripped)
        except ValueError:
            pass
    if stripped.startswith("[") or stripped.startswith("{"):
        try:
            return json.loads(stripped)
        except json.JSONDecodeError:
            pass
    return stripped


def _env_config(environ: Mapping[str, str]) -> Dict[str, Any]:
    """Translate ``PODGELF__A__B=value`` variables into nested mappings.

    Segments are lowercased, so ``PODGELF__CUSTOM_FIELDS___APP`` sets
    ``custom_fields["_app"]``.
    """

    data: Dict[str, Any] = {}
    for env_key, raw_value in environ.items():
        if not env_key.startswith(_ENV_PREFIX):
            continue
        path = [segment.lower() for segment in env_key[len(_ENV_PREFIX) :].split("__")]
        target = data
        for segment in path[:-1]:
            child = target.setdefault(segment, {})
            if not isinstance(child, dict):
                child = target[segment] = {}
            target = child
        target[path[-1]] = _coerce_value(raw_value)
    return data


def load_configuration(
    overrides: Mapping[str, Any] | None = None,
    *,
    cwd: Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> GelfConfig:
    """Load configuration from supported sources in precedence order.

    Later sources win: user config dir, working directory files,
    ``[tool.podgelf]`` in ``pyproject.toml``, environment, ``overrides``.
    """

    directory = cwd or Path.cwd()
    merged = default_config()
    sources = (
        _load_directory(Path(user_config_dir(_APP_NAME))),
        _load_directory(directory),
        _load_pyproject(directory),
        _env_config(os.environ if environ is None else environ),
        dict(overrides or {}),
    )
    for source in sources:
        if source:
            _merge(merged, source)
    return build_config(merged)
