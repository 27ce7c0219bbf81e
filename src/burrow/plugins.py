"""Plugin registry built from the plugins directory.

The directory is scanned once at startup::

    plugins/
      greet.py           # plugins.greet  -> the module
      store/
        index.py         # its exports become plugins.store.get, .set ...
      text/
        slug.py          # plugins.text.slug -> the module

Folders become nested namespaces.  A file or folder named ``index``
promotes its exports into the enclosing namespace.  The finished registry
is immutable and is handed to every request as ``request.plugins`` and to
every template as ``plugins``.
"""

import importlib.util
import logging
from collections.abc import Iterator, Mapping
from pathlib import Path
from types import ModuleType
from typing import Any

from burrow.errors import ConfigurationError

logger = logging.getLogger("burrow.plugins")

INDEX_NAME = "index"


class Namespace(Mapping[str, Any]):
    """An immutable namespace with both attribute and item access.

    ``plugins.store.get`` and ``plugins["store"]["get"]`` are equivalent.
    """

    __slots__ = ("_entries", "_name")

    def __init__(self, entries: Mapping[str, Any] | None = None, *, name: str = "plugins") -> None:
        object.__setattr__(self, "_entries", dict(entries or {}))
        object.__setattr__(self, "_name", name)

    def __getattr__(self, name: str) -> Any:
        if name.startswith("_"):
            raise AttributeError(name)
        try:
            return self._entries[name]
        except KeyError:
            msg = f"{self._name!r} has no plugin {name!r}"
            raise AttributeError(msg) from None

    def __setattr__(self, name: str, value: object) -> None:
        msg = f"{self._name!r} is read-only"
        raise AttributeError(msg)

    def __delattr__(self, name: str) -> None:
        msg = f"{self._name!r} is read-only"
        raise AttributeError(msg)

    def __getitem__(self, key: str) -> Any:
        return self._entries[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __dir__(self) -> list[str]:
        return sorted(self._entries)

    def __repr__(self) -> str:
        return f"Namespace({self._name!r}, {sorted(self._entries)!r})"


def load_plugins(plugins_path: str | Path) -> Namespace:
    """Scan *plugins_path* and build the plugin registry.

    A missing directory yields an empty registry.

    Raises:
        ConfigurationError: If a plugin module fails to import.
    """
    root = Path(plugins_path)
    if not root.is_dir():
        logger.debug("No plugins directory at %s", root)
        return Namespace()
    return Namespace(_scan(root, ("plugins",)), name="plugins")


def exported_names(module: ModuleType) -> dict[str, Any]:
    """A module's exports: ``__all__`` if defined, else its public attributes.

    Imported modules are never exported.
    """
    names = getattr(module, "__all__", None)
    if names is not None:
        return {name: getattr(module, name) for name in names}
    return {
        name: value
        for name, value in vars(module).items()
        if not name.startswith("_") and not isinstance(value, ModuleType)
    }


def _scan(directory: Path, dotted: tuple[str, ...]) -> dict[str, Any]:
    promoted: dict[str, Any] = {}
    entries: dict[str, Any] = {}

    for item in sorted(directory.iterdir()):
        if item.name.startswith(("_", ".")):
            continue

        if item.is_dir():
            if item.name == INDEX_NAME:
                promoted.update(_scan(item, dotted))
            else:
                entries[item.name] = Namespace(
                    _scan(item, (*dotted, item.name)),
                    name=".".join((*dotted, item.name)),
                )
            continue

        if item.suffix != ".py":
            continue

        module = _load_module(item, (*dotted, item.stem))
        if item.stem == INDEX_NAME:
            promoted.update(exported_names(module))
        else:
            entries[item.stem] = module

    # Siblings win over names promoted from index
    return {**promoted, **entries}


def _load_module(file: Path, dotted: tuple[str, ...]) -> ModuleType:
    module_name = "_burrow_" + "_".join(dotted)
    spec = importlib.util.spec_from_file_location(module_name, file)
    if spec is None or spec.loader is None:
        msg = f"Cannot load plugin {file}"
        raise ConfigurationError(msg)

    module = importlib.util.module_from_spec(spec)
    try:
        spec.loader.exec_module(module)
    except Exception as exc:
        msg = f"Plugin {file} failed to load: {exc}"
        raise ConfigurationError(msg) from exc

    logger.debug("Loaded plugin %s", ".".join(dotted))
    return module
