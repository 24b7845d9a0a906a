# Copyright (c) 2025 - 2026, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Registry-based lazy imports for package ``__getattr__``."""

import importlib

__all__ = ("lazy_import",)


def lazy_import(
    name: str,
    module_map: dict[str, tuple[str, str | None]],
    package: str,
    globs: dict,
) -> object:
    """Registry-based lazy import for module ``__getattr__``.

    Looks up *name* in *module_map*, imports the object, and caches it
    in *globs* so that subsequent access bypasses ``__getattr__``
    entirely.

    Args:
        name: Attribute name being looked up.
        module_map: ``{attr: (dotted_module, import_name | None)}``.
            When *import_name* is ``None``, *name* is taken from the
            module via ``getattr``.
        package: The package name (``__name__`` of the caller).
        globs: The caller's ``globals()`` dict for caching.

    Raises:
        AttributeError: If *name* is not in *module_map*.
    """
    if name not in module_map:
        raise AttributeError(f"module '{package}' has no attribute '{name}'")
    module_path, import_name = module_map[name]

    pkg = globs.get("__package__") or package.rpartition(".")[0]
    mod = importlib.import_module(f".{module_path}", pkg)
    obj = getattr(mod, import_name or name)
    globs[name] = obj
    return obj
