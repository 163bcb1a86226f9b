"""Settings resolution: command line, environment, .propcat/config.json, defaults."""

from __future__ import annotations

import json
import logging
import os
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any, Mapping

from propcat.exit_codes import EXIT_USAGE, PropcatError

log = logging.getLogger(__name__)

CONFIG_DIR = ".propcat"
CONFIG_NAME = "config.json"

DISPATCH_FILE = "SwitchCase.txt"
CSV_FILE = "Properties.csv"

# environment variable -> settings key
ENV_VARS = {
    "PROPCAT_OUTPUT_DIR": "output_dir",
    "PROPCAT_START_CLASS": "start_class",
    "PROPCAT_STRICT_DOCS": "strict_docs",
}

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off", ""}


@dataclass
class Settings:
    start_class: str | None = None
    include_nested: bool = True
    track_exits: bool = True
    strict_docs: bool = False
    output_dir: str = "."
    dispatch_target: str = "object"
    dispatch_selector: str = "expression"
    csv_delimiter: str = ","
    csv_sep_line: bool = True
    csv_quote: bool = True

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @property
    def output_path(self) -> Path:
        return Path(self.output_dir)


_FIELD_TYPES = {f.name: f.type for f in fields(Settings)}


def find_project_root(start: str = ".") -> Path:
    """Walk up from *start* to the nearest directory holding .propcat/ or .git/.

    Falls back to *start* itself.
    """
    current = Path(start).resolve()
    for candidate in (current, *current.parents):
        if (candidate / CONFIG_DIR).is_dir() or (candidate / ".git").exists():
            return candidate
    return current


def _load_project_config(project_root: Path) -> dict:
    """Load .propcat/config.json if it exists.

    Returns an empty dict if the file is missing; a malformed file is
    logged and ignored.
    """
    config_path = project_root / CONFIG_DIR / CONFIG_NAME
    if not config_path.exists():
        return {}
    try:
        data = json.loads(config_path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        log.warning("Ignoring unreadable %s: %s", config_path, exc)
        return {}
    if not isinstance(data, dict):
        log.warning("Ignoring %s: expected a JSON object", config_path)
        return {}
    return data


def write_project_config(config: dict, project_root: Path | None = None) -> Path:
    """Write (or update) .propcat/config.json.

    Merges *config* into the existing config so existing keys are preserved.
    Returns the path of the written file.
    """
    if project_root is None:
        project_root = find_project_root()
    config_dir = project_root / CONFIG_DIR
    config_dir.mkdir(exist_ok=True)
    config_path = config_dir / CONFIG_NAME
    existing = _load_project_config(project_root)
    existing.update(config)
    config_path.write_text(json.dumps(existing, indent=2, sort_keys=True) + "\n", encoding="utf-8")
    return config_path


def coerce_value(key: str, raw: Any) -> Any:
    """Convert *raw* (usually a string) to the type of settings field *key*.

    Raises KeyError for unknown keys and ValueError for bad values.
    """
    if key not in _FIELD_TYPES:
        raise KeyError(key)
    kind = _FIELD_TYPES[key]
    if not isinstance(raw, str):
        return _check_type(key, kind, raw)
    if kind == "bool":
        lowered = raw.strip().lower()
        if lowered in _TRUE:
            return True
        if lowered in _FALSE:
            return False
        raise ValueError(f"{key} expects a boolean, got {raw!r}")
    if kind == "str | None":
        return raw or None
    if key == "csv_delimiter" and len(raw) != 1:
        raise ValueError(f"csv_delimiter must be a single character, got {raw!r}")
    return raw


def _check_type(key: str, kind: str, value: Any) -> Any:
    # values read from config.json are already typed
    if kind == "bool" and isinstance(value, bool):
        return value
    if kind == "str | None" and value is None:
        return value
    expected = "a boolean" if kind == "bool" else "a string"
    raise ValueError(f"{key} expects {expected}, got {value!r}")


def load_settings(
    overrides: Mapping[str, Any] | None = None,
    project_root: Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> Settings:
    """Resolve settings; first match wins per key.

    1. *overrides* (command line options; ``None`` values are skipped)
    2. ``PROPCAT_*`` environment variables
    3. ``.propcat/config.json`` in the project root
    4. defaults
    """
    if project_root is None:
        project_root = find_project_root()
    if environ is None:
        environ = os.environ

    values: dict[str, Any] = {}
    for key, raw in _load_project_config(project_root).items():
        try:
            values[key] = coerce_value(key, raw)
        except KeyError:
            log.warning("Unknown setting %r in %s", key, CONFIG_NAME)
        except ValueError as exc:
            log.warning("Ignoring %s setting: %s", CONFIG_NAME, exc)
    for var, key in ENV_VARS.items():
        if var in environ:
            try:
                values[key] = coerce_value(key, environ[var])
            except ValueError as exc:
                raise PropcatError(f"{var}: {exc}", EXIT_USAGE) from None
    for key, value in (overrides or {}).items():
        if value is not None:
            values[key] = value
    return Settings(**values)
