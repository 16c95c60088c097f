"""Typed, layered configuration for the ERP console.

Layers (later wins):
    0. embedded defaults (``_DEFAULTS``)
    1. ``core/config/defaults.ini``
    2. environment variables ``ERPCONSOLE_<SECTION>__<KEY>``
    3. machine ``core/config/config.ini``
    4. user ``~/.config/erpconsole/config.ini`` (``%APPDATA%`` on Windows)

Every resolved value remembers the layer it came from (``meta_source``).
"""
from __future__ import annotations

import configparser
import os
from dataclasses import dataclass, fields
from pathlib import Path
from threading import RLock
from typing import Any, Callable, Dict, Iterator, List, Mapping, Optional, Tuple

Sections = Dict[str, Dict[str, Any]]

CONFIG_DIR = Path(__file__).resolve().parent
ENV_PREFIX = "ERPCONSOLE_"

_DEFAULTS: Sections = {
    "Backend": {
        "base_url": "http://localhost:5000/api",
        "timeout_seconds": "10",
        "token_env": "ERPCONSOLE_TOKEN",
    },
    "Print": {
        "format": "html",
        "output_dir": "",
        "watermark_text": "copy",
        "dispatch": "true",
    },
    "Logging": {
        "level": "INFO",
        "file": "",
    },
}

_TRUE = {"1", "true", "yes", "on"}


# --------------------------------------------------------------------------- #
#  Typed sections
# --------------------------------------------------------------------------- #

@dataclass
class BackendConfig:
    base_url: str = "http://localhost:5000/api"
    timeout_seconds: float = 10.0
    token_env: str = "ERPCONSOLE_TOKEN"


@dataclass
class PrintConfig:
    format: str = "html"           # html | pdf
    output_dir: str = ""           # empty -> system temp dir
    watermark_text: str = "copy"
    dispatch: bool = True          # False -> only write the print surface


@dataclass
class LoggingConfig:
    level: str = "INFO"
    file: str = ""


# --------------------------------------------------------------------------- #
#  Layer sources
# --------------------------------------------------------------------------- #

def _ini_sections(path: Path) -> Sections:
    parser = configparser.ConfigParser()
    parser.read(path, encoding="utf-8")
    return {name: dict(parser.items(name)) for name in parser.sections()}


def _env_sections(environ: Mapping[str, str]) -> Sections:
    """``ERPCONSOLE_PRINT__OUTPUT_DIR=x`` -> ``{"Print": {"output_dir": "x"}}``."""
    out: Sections = {}
    for name, value in environ.items():
        if not name.startswith(ENV_PREFIX):
            continue
        section, sep, key = name[len(ENV_PREFIX):].partition("__")
        if not sep or not section or not key:
            continue
        out.setdefault(section.title(), {})[key.lower()] = value
    return out


def _user_ini_path() -> Path:
    if os.name == "nt":
        base = os.environ.get("APPDATA") or str(Path.home() / "AppData" / "Roaming")
        return Path(base) / "ERPConsole" / "config.ini"
    base = os.environ.get("XDG_CONFIG_HOME") or str(Path.home() / ".config")
    return Path(base) / "erpconsole" / "config.ini"


def _coerce(value: Any, type_name: str) -> Any:
    # dataclass field types are strings here (postponed annotations)
    if type_name == "bool":
        return value if isinstance(value, bool) else str(value).strip().lower() in _TRUE
    if type_name == "float":
        return float(value)
    if type_name == "int":
        return int(value)
    return "" if value is None else str(value)


def _section_object(cls: type, values: Mapping[str, Any]) -> Any:
    return cls(**{f.name: _coerce(values.get(f.name, f.default), str(f.type)) for f in fields(cls)})


# --------------------------------------------------------------------------- #
#  ConfigService
# --------------------------------------------------------------------------- #

class ConfigService:
    """Merged view over all layers with typed section objects.

    ``config_dir``, ``user_ini`` and ``environ`` default to the real locations;
    tests pass temporary ones. Missing files are skipped, never created.
    """

    def __init__(self, *, config_dir: Optional[Path] = None,
                 user_ini: Optional[Path] = None,
                 environ: Optional[Mapping[str, str]] = None) -> None:
        self._lock = RLock()
        self._config_dir = Path(config_dir) if config_dir is not None else CONFIG_DIR
        self._user_ini = Path(user_ini) if user_ini is not None else _user_ini_path()
        self._environ = environ
        self.reload()

    @property
    def defaults_ini(self) -> Path:
        return self._config_dir / "defaults.ini"

    @property
    def machine_ini(self) -> Path:
        return self._config_dir / "config.ini"

    def _env(self) -> Mapping[str, str]:
        return os.environ if self._environ is None else self._environ

    def _layers(self) -> Iterator[Tuple[str, str, Sections]]:
        yield "code", "embedded", _DEFAULTS
        if self.defaults_ini.is_file():
            yield "defaults.ini", str(self.defaults_ini), _ini_sections(self.defaults_ini)
        yield "env", "os.environ", _env_sections(self._env())
        if self.machine_ini.is_file():
            yield "machine", str(self.machine_ini), _ini_sections(self.machine_ini)
        if self._user_ini.is_file():
            yield "user", str(self._user_ini), _ini_sections(self._user_ini)

    def reload(self) -> None:
        with self._lock:
            values: Sections = {}
            origins: Dict[Tuple[str, str], Dict[str, str]] = {}
            for layer, origin, sections in self._layers():
                for section, items in sections.items():
                    for key, value in items.items():
                        values.setdefault(section, {})[key] = value
                        origins[(section, key)] = {"layer": layer, "source": origin}
            self._values = values
            self._origins = origins

            self.backend: BackendConfig = _section_object(BackendConfig, values.get("Backend", {}))
            self.printing: PrintConfig = _section_object(PrintConfig, values.get("Print", {}))
            self.logging: LoggingConfig = _section_object(LoggingConfig, values.get("Logging", {}))

    def get(self, section: str, key: str, *, cast: Callable[[Any], Any] = str) -> Any:
        """Raw merged value converted with `cast`; None when unset."""
        raw = self._values.get(section, {}).get(key)
        if raw is None:
            return None
        if cast is bool:
            return _coerce(raw, "bool")
        return cast(raw)

    def meta_source(self, section: str, key: str) -> Optional[Dict[str, str]]:
        return self._origins.get((section, key))

    def sections(self) -> List[str]:
        return sorted(self._values)

    def auth_token(self) -> Optional[str]:
        """Bearer token for the document store, read from the configured env var."""
        token = (self._env().get(self.backend.token_env) or "").strip()
        return token or None


_instance: Optional[ConfigService] = None
_instance_lock = RLock()


def get_config_service() -> ConfigService:
    """Lazily created process-wide instance."""
    global _instance
    with _instance_lock:
        if _instance is None:
            _instance = ConfigService()
        return _instance
