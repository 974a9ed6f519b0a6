"""
Tool configuration for power-domains.

Settings are read from two optional TOML files and applied over the
built-in defaults, later files winning:

1. User config: ``~/.config/power-domains/config.toml``
2. Project config: ``.power-domains.toml`` or ``power-domains.toml``, found
   by searching upward from the working directory to the repository root

Every setting is declared once in :data:`SETTINGS`; loading, validation,
``config get`` and the generated template are all driven from that table.

Example::

    from power_domains.config import Config

    config = Config.load()
    config.defaults.format        # "table" unless a config file says otherwise
    config.get("display.precision")
    config.origin_of("display.precision")   # "default" or the file path
"""

from __future__ import annotations

import sys
import warnings
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, Iterator, List, Optional, Tuple

from power_domains.exceptions import PowerDomainError

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

__all__ = [
    "CONFIG_FILENAMES",
    "USER_CONFIG_PATH",
    "SETTINGS",
    "Setting",
    "DefaultsConfig",
    "DisplayConfig",
    "Config",
    "ConfigError",
    "find_project_config",
    "config_files",
    "read_config_file",
    "toml_value",
    "generate_template",
]

# Project config names, in order of preference
CONFIG_FILENAMES = [".power-domains.toml", "power-domains.toml"]

USER_CONFIG_PATH = Path.home() / ".config" / "power-domains" / "config.toml"

OUTPUT_FORMATS = ("table", "json")


class ConfigError(PowerDomainError):
    """A configuration file is unreadable or holds an invalid value."""


@dataclass
class DefaultsConfig:
    """Default options for CLI commands."""

    format: str = "table"
    verbose: bool = False
    quiet: bool = False


@dataclass
class DisplayConfig:
    """How voltages are rendered."""

    precision: int = 3


@dataclass(frozen=True)
class Setting:
    """One configurable key: where it lives and what values it accepts."""

    section: str
    key: str
    check: Callable[[Any], bool]
    help: str

    @property
    def name(self) -> str:
        return f"{self.section}.{self.key}"


def _is_bool(value: Any) -> bool:
    return isinstance(value, bool)


def _is_precision(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value >= 1


SETTINGS: List[Setting] = [
    Setting("defaults", "format", lambda v: v in OUTPUT_FORMATS, "Output format: table, json"),
    Setting("defaults", "verbose", _is_bool, "Enable debug logging"),
    Setting("defaults", "quiet", _is_bool, "Only log errors"),
    Setting("display", "precision", _is_precision, "Significant digits when rendering voltages"),
]

_BY_NAME: Dict[Tuple[str, str], Setting] = {(s.section, s.key): s for s in SETTINGS}
SECTIONS = tuple(dict.fromkeys(s.section for s in SETTINGS))


@dataclass
class Config:
    """Effective configuration after all config files are applied."""

    defaults: DefaultsConfig = field(default_factory=DefaultsConfig)
    display: DisplayConfig = field(default_factory=DisplayConfig)

    # "section.key" -> file that last set it
    origin: Dict[str, Path] = field(default_factory=dict, repr=False)

    @classmethod
    def load(cls, start_dir: Optional[Path] = None) -> Config:
        """Apply the user config, then the project config, over the defaults.

        Raises:
            ConfigError: If a file cannot be read or holds an invalid value
        """
        config = cls()
        for path in config_files(start_dir):
            config.update(read_config_file(path), path)
        return config

    def update(self, data: Dict[str, Any], path: Path) -> None:
        """Apply the settings parsed from *path*.

        Unknown sections and keys are ignored with a warning.
        """
        for section, table in data.items():
            if section not in SECTIONS:
                warnings.warn(f"Unknown config section '{section}' in {path}", stacklevel=2)
                continue
            if not isinstance(table, dict):
                raise ConfigError(f"Config section '{section}' must be a table", {"file": path})

            for key, value in table.items():
                setting = _BY_NAME.get((section, key))
                if setting is None:
                    warnings.warn(f"Unknown config key '{section}.{key}' in {path}", stacklevel=2)
                    continue
                if not setting.check(value):
                    raise ConfigError(
                        f"Invalid {setting.name} value {value!r}",
                        context={"file": path},
                        suggestions=[setting.help],
                    )
                setattr(getattr(self, section), key, value)
                self.origin[setting.name] = path

    def get(self, name: str) -> Any:
        """Return the value of a ``section.key`` setting.

        Raises:
            ConfigError: If *name* is not a known setting
        """
        section, _, key = name.partition(".")
        if (section, key) not in _BY_NAME:
            known = ", ".join(s.name for s in SETTINGS)
            raise ConfigError(f"Unknown config key '{name}'", suggestions=[f"Known keys: {known}"])
        return getattr(getattr(self, section), key)

    def origin_of(self, name: str) -> str:
        """Return the file that set *name*, or ``"default"``."""
        path = self.origin.get(name)
        return str(path) if path is not None else "default"

    def items(self) -> Iterator[Tuple[Setting, Any]]:
        """Yield every setting with its effective value, in table order."""
        for setting in SETTINGS:
            yield setting, self.get(setting.name)


def find_project_config(start_dir: Path) -> Optional[Path]:
    """Search *start_dir* and its parents for a project config file.

    The search ends at the first directory containing ``.git``.
    """
    start = start_dir.resolve()
    for directory in (start, *start.parents):
        for filename in CONFIG_FILENAMES:
            candidate = directory / filename
            if candidate.is_file():
                return candidate
        if (directory / ".git").exists():
            return None
    return None


def config_files(start_dir: Optional[Path] = None) -> List[Path]:
    """Return the existing config files in the order they are applied."""
    files = []
    if USER_CONFIG_PATH.is_file():
        files.append(USER_CONFIG_PATH)
    project = find_project_config(start_dir if start_dir is not None else Path.cwd())
    if project is not None:
        files.append(project)
    return files


def read_config_file(path: Path) -> Dict[str, Any]:
    """Parse one TOML config file.

    Raises:
        ConfigError: If the file is unreadable or not valid TOML
    """
    try:
        with path.open("rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML: {e}", context={"file": path}) from e
    except OSError as e:
        raise ConfigError(f"Cannot read config file: {e}", context={"file": path}) from e


def toml_value(value: Any) -> str:
    """Render a setting value as TOML."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str):
        return f'"{value}"'
    return str(value)


def generate_template() -> str:
    """Return a config file with every setting commented out at its default."""
    defaults = Config()
    lines = [
        "# power-domains configuration",
        f"# Project: {CONFIG_FILENAMES[0]}  User: ~/.config/power-domains/config.toml",
    ]
    for section in SECTIONS:
        lines += ["", f"[{section}]"]
        for setting, value in defaults.items():
            if setting.section == section:
                lines += [f"# {setting.help}", f"# {setting.key} = {toml_value(value)}"]
    return "\n".join(lines) + "\n"
