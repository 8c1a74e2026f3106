from __future__ import annotations

import json
import logging
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

import yaml


DEFAULT_DATA_DIR = Path(".")
DEFAULT_AUTO_DESTINATION = "test"
DEFAULT_LOG_LEVEL = "WARNING"

_LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")
_KNOWN_KEYS = frozenset({"data_dir", "auto_destination", "log_level"})


def _settings_table(obj: Any, source: Path) -> Dict[str, Any]:
    if obj is None:
        return {}
    if not isinstance(obj, dict):
        raise ValueError(f"registry settings in {source} must be a table/mapping, got {type(obj).__name__}")
    unknown = sorted(set(obj) - _KNOWN_KEYS)
    if unknown:
        raise ValueError(f"unknown registry settings in {source}: {', '.join(unknown)}")
    return obj


def _read_toml(path: Path) -> Dict[str, Any]:
    with path.open("rb") as f:
        return tomllib.load(f)


def _registry_section_from_pyproject(project_root: Path) -> Dict[str, Any]:
    """[tool.employee_registry] of the project's pyproject.toml, or {} when absent."""
    pyproject = project_root / "pyproject.toml"
    if not pyproject.is_file():
        return {}
    tool = _read_toml(pyproject).get("tool") or {}
    return _settings_table(tool.get("employee_registry"), pyproject)


def _registry_settings_from_file(path: Path) -> Dict[str, Any]:
    """Flat settings mapping from a .json / .yaml / .yml / .toml override file."""
    if not path.exists():
        raise FileNotFoundError(f"Config override not found: {path}")

    readers = {
        ".json": lambda p: json.loads(p.read_text(encoding="utf-8")),
        ".yaml": lambda p: yaml.safe_load(p.read_text(encoding="utf-8")),
        ".yml": lambda p: yaml.safe_load(p.read_text(encoding="utf-8")),
        ".toml": _read_toml,
    }
    reader = readers.get(path.suffix.lower())
    if reader is None:
        raise ValueError(f"Unsupported config override format: {path}")
    return _settings_table(reader(path), path)


@dataclass(frozen=True)
class AppConfig:
    data_dir: Path = DEFAULT_DATA_DIR
    auto_destination: str = DEFAULT_AUTO_DESTINATION
    log_level: str = DEFAULT_LOG_LEVEL

    @property
    def logging_level(self) -> int:
        name = str(self.log_level).upper()
        if name not in _LOG_LEVELS:
            raise ValueError(f"Unknown log level '{self.log_level}'")
        return getattr(logging, name)

    def resolve(self, name: Union[str, Path]) -> Path:
        """Resolve a user-supplied file name against data_dir (absolute names pass through)."""
        path = Path(name)
        if path.is_absolute():
            return path
        return Path(self.data_dir) / path

    def validate(self, *, strict: bool = True) -> Dict[str, str]:
        issues: Dict[str, str] = {}

        try:
            _ = self.logging_level
        except ValueError as e:
            issues["log_level"] = str(e)

        if not str(self.auto_destination).strip():
            issues["auto_destination"] = "auto_destination must not be empty"

        data_dir = Path(self.data_dir)
        if data_dir.exists() and not data_dir.is_dir():
            issues["data_dir"] = f"not a directory: {data_dir}"

        if strict and issues:
            details = "\n- ".join(f"{k}: {v}" for k, v in issues.items())
            raise ValueError("Config validation failed:\n- " + details)
        return issues

    @classmethod
    def _from_map(cls, *, project_root: Path, top: Mapping[str, Any]) -> "AppConfig":
        raw_dir = top.get("data_dir")
        data_dir = Path(str(raw_dir)) if raw_dir is not None else DEFAULT_DATA_DIR
        if not data_dir.is_absolute():
            data_dir = (project_root / data_dir).resolve()
        auto_destination = top.get("auto_destination")
        log_level = top.get("log_level")

        return cls(
            data_dir=data_dir,
            auto_destination=str(DEFAULT_AUTO_DESTINATION if auto_destination is None else auto_destination),
            log_level=str(DEFAULT_LOG_LEVEL if log_level is None else log_level).upper(),
        )


def load_app_config(*, project_root: Optional[Path] = None, override_path: Optional[Path] = None) -> AppConfig:
    root = Path(project_root) if project_root else Path.cwd()

    # override file wins key by key over pyproject.toml
    top = _registry_section_from_pyproject(root)
    if override_path:
        top = {**top, **_registry_settings_from_file(Path(override_path))}

    return AppConfig._from_map(project_root=root, top=top)
