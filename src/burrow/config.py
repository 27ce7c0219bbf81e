"""Application configuration.

AppConfig is a frozen dataclass: immutable after creation, IDE-autocompletable,
no string-key dict lookups.

Settings are layered by :func:`load_config`: dataclass defaults, then
``BURROW_*`` environment variables, then command-line flags.  A later
source overrides an earlier one.
"""

import argparse
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, fields, replace
from typing import Any

from burrow.errors import ConfigurationError

_ENV_PREFIX = "BURROW_"

_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})
_FALSE_VALUES = frozenset({"0", "false", "no", "off", ""})


@dataclass(frozen=True, slots=True)
class AppConfig:
    """Application configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = AppConfig(port=8080, routes_path="site/routes")
    """

    # Server
    host: str = "127.0.0.1"
    port: int = 3000
    debug: bool = False

    # Routing table
    routes_path: str = "routes"
    not_found_route: str = "404.ejs"
    error_route: str = "500.ejs"
    template_suffix: str = ".ejs"

    # Plugins
    plugins_path: str = "plugins"

    # Middleware modules are re-executed on every request unless cached
    cache_middleware: bool = False

    # Logging
    log_level: str = "info"


# Command-line flags: (short, long, field name). Short forms keep the
# two-letter spelling of the original server (``-rp``, ``-cm``...).
CONFIG_FLAGS: tuple[tuple[str, str, str], ...] = (
    ("-p", "--port", "port"),
    ("-rp", "--routes-path", "routes_path"),
    ("-pp", "--plugins-path", "plugins_path"),
    ("-cm", "--cache-middleware", "cache_middleware"),
    ("-nf", "--not-found-route", "not_found_route"),
    ("-er", "--error-route", "error_route"),
)


def add_config_arguments(parser: argparse.ArgumentParser) -> None:
    """Register the configuration flags on *parser*.

    Every flag defaults to ``None`` so that only flags the user actually
    passed override earlier sources.
    """
    for short, long, name in CONFIG_FLAGS:
        if name == "cache_middleware":
            parser.add_argument(
                short,
                long,
                dest=name,
                action="store_const",
                const=True,
                default=None,
                help="Keep middleware modules loaded for the process lifetime",
            )
        else:
            parser.add_argument(short, long, dest=name, default=None)
    parser.add_argument("--host", dest="host", default=None, help="Bind host address")
    parser.add_argument(
        "--debug",
        dest="debug",
        action="store_const",
        const=True,
        default=None,
        help="Enable auto-reload and debug logging",
    )
    parser.add_argument("--log-level", dest="log_level", default=None)


def load_config(
    argv: Sequence[str] | None = None,
    environ: Mapping[str, str] | None = None,
) -> AppConfig:
    """Build an AppConfig from defaults, environment and CLI flags.

    Args:
        argv: Command-line arguments (without the program name).  Only the
            configuration flags are recognised; anything else is an error.
        environ: Environment mapping, usually ``os.environ``.

    Raises:
        ConfigurationError: If a value cannot be converted to its field type.
    """
    config = config_from_env(AppConfig(), environ or {})
    if argv:
        parser = argparse.ArgumentParser(add_help=False)
        add_config_arguments(parser)
        args = parser.parse_args(list(argv))
        config = config_from_args(config, args)
    return config


def config_from_env(config: AppConfig, environ: Mapping[str, str]) -> AppConfig:
    """Return *config* with ``BURROW_<FIELD>`` environment overrides applied."""
    overrides: dict[str, Any] = {}
    for f in fields(AppConfig):
        key = _ENV_PREFIX + f.name.upper()
        if key in environ:
            overrides[f.name] = environ[key]
    return _apply(config, overrides, source="environment")


def config_from_args(config: AppConfig, args: argparse.Namespace) -> AppConfig:
    """Return *config* with every flag the user passed applied."""
    names = {f.name for f in fields(AppConfig)}
    overrides = {
        name: value
        for name, value in vars(args).items()
        if name in names and value is not None
    }
    return _apply(config, overrides, source="command line")


def _apply(config: AppConfig, overrides: Mapping[str, Any], *, source: str) -> AppConfig:
    if not overrides:
        return config
    types = {f.name: f.type for f in fields(AppConfig)}
    converted: dict[str, Any] = {}
    for name, value in overrides.items():
        try:
            converted[name] = _convert(value, types[name])
        except ValueError as exc:
            msg = f"Invalid value for {name!r} from {source}: {value!r}"
            raise ConfigurationError(msg) from exc
    return replace(config, **converted)


def _convert(value: Any, annotation: Any) -> Any:
    if not isinstance(value, str):
        return value
    if annotation in (int, "int"):
        return int(value)
    if annotation in (bool, "bool"):
        lowered = value.strip().lower()
        if lowered in _TRUE_VALUES:
            return True
        if lowered in _FALSE_VALUES:
            return False
        msg = f"not a boolean: {value!r}"
        raise ValueError(msg)
    return value
