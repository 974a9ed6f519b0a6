"""Config command: inspect and create power-domains configuration files.

Usage:
    power-domains config                   Effective settings and where each came from
    power-domains config get display.precision
    power-domains config --paths           Which config files are read
    power-domains config --init [--user]   Write a commented template
"""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import List, Optional

from power_domains import config as config_module
from power_domains.cli.utils import print_error
from power_domains.config import (
    CONFIG_FILENAMES,
    Config,
    ConfigError,
    find_project_config,
    generate_template,
    toml_value,
)


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="power-domains config",
        description="Inspect and create power-domains configuration",
    )
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument("--show", action="store_true", help="Show effective settings (default)")
    mode.add_argument("--paths", action="store_true", help="Show which config files are read")
    mode.add_argument("--init", action="store_true", help="Write a config template")
    parser.add_argument("--user", action="store_true", help="With --init, write the user config")
    parser.add_argument("action", nargs="?", choices=["get"])
    parser.add_argument("key", nargs="?", help="Setting name, e.g. display.precision")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Entry point for ``power-domains config``."""
    args = create_parser().parse_args(argv)

    try:
        if args.init:
            if args.user:
                return _write_template(config_module.USER_CONFIG_PATH)
            return _write_template(Path.cwd() / CONFIG_FILENAMES[0])
        if args.paths:
            return _show_paths()

        config = Config.load()
        if args.action == "get":
            if not args.key:
                raise ConfigError(
                    "'get' needs a setting name",
                    suggestions=["power-domains config get display.precision"],
                )
            value = config.get(args.key)
            print(toml_value(value) if isinstance(value, bool) else value)
            return 0
        return _show(config)
    except ConfigError as e:
        print_error(e)
        return 1


def _show(config: Config) -> int:
    print("# Effective power-domains configuration")
    section = None
    for setting, value in config.items():
        if setting.section != section:
            section = setting.section
            print(f"\n[{section}]")
        origin = config.origin_of(setting.name)
        if origin != "default":
            origin = Path(origin).name
        print(f"{setting.key} = {toml_value(value)}  # from: {origin}")
    return 0


def _show_paths() -> int:
    user = config_module.USER_CONFIG_PATH
    project = find_project_config(Path.cwd())

    print("Config file paths:")
    print(f"  user:    {user} ({'found' if user.is_file() else 'not found'})")
    if project is not None:
        print(f"  project: {project} (found)")
    else:
        print(f"  project: {' or '.join(CONFIG_FILENAMES)} (not found)")
    return 0


def _write_template(target: Path) -> int:
    if target.exists():
        raise ConfigError(
            f"Config file already exists: {target}",
            suggestions=["Remove it first or edit it by hand"],
        )
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(generate_template())
    except OSError as e:
        raise ConfigError(f"Cannot write config file: {e}", context={"file": target}) from e

    print(f"Created config template: {target}")
    return 0
