"""Load script modules by identifier.

An identifier is either a filesystem path (absolute, relative to the working
directory, containing a separator or ending in ``.py``) or a dotted module
name found on ``sys.path``.  Either way the source is executed afresh on every
load, so two runs never share a script instance.  Each source file gets one
``boots_script_*`` entry in ``sys.modules`` (placed inside the real package for
a dotted submodule), replaced on every reload.
"""

from __future__ import annotations

import hashlib
import importlib.util
import os
import sys
from pathlib import Path
from types import ModuleType

from loguru import logger


def looks_like_path(identifier: str) -> bool:
    return (
        os.path.isabs(identifier)
        or "/" in identifier
        or os.sep in identifier
        or identifier.endswith(".py")
        or identifier.startswith(".")
    )


def load_module(identifier: str) -> ModuleType:
    """Load *identifier* and return a freshly executed module object.

    Raises whatever the import raises (``FileNotFoundError``,
    ``ModuleNotFoundError``, errors from the module body, ...).
    """
    if looks_like_path(identifier):
        return load_file(Path(identifier))
    return load_dotted(identifier)


def load_file(path: Path) -> ModuleType:
    """Execute the Python file at *path* (or its package ``__init__.py``)."""
    return _exec_fresh(_find_source(path).resolve())


def load_dotted(name: str) -> ModuleType:
    """Execute the source of the dotted module *name*, bypassing the import cache.

    Parent packages are imported normally.  A plain module is executed under a
    synthetic name inside its real package so relative imports resolve there;
    a package gets its own synthetic namespace, like a package loaded by path.
    """
    spec = importlib.util.find_spec(name)
    if spec is None:
        msg = f"No module named {name!r}"
        raise ModuleNotFoundError(msg, name=name)
    if not spec.has_location or spec.origin is None or not os.path.isfile(spec.origin):
        msg = f"Module {name!r} has no source file to load"
        raise ImportError(msg, name=name)

    if spec.submodule_search_locations is not None:
        return _exec_fresh(Path(spec.origin).resolve())
    return _exec_fresh(Path(spec.origin).resolve(), parent=name.rpartition(".")[0])


def _exec_fresh(module_path: Path, *, parent: str = "") -> ModuleType:
    digest = hashlib.sha1(str(module_path).encode(), usedforsecurity=False).hexdigest()[:8]
    module_name = f"boots_script_{module_path.stem}_{digest}"
    if parent:
        module_name = f"{parent}.{module_name}"
    is_package = module_path.name == "__init__.py"

    spec = importlib.util.spec_from_file_location(
        module_name,
        module_path,
        submodule_search_locations=[str(module_path.parent)] if is_package else None,
    )
    if spec is None or spec.loader is None:
        msg = f"Could not load module from {module_path}"
        raise ImportError(msg)

    module = importlib.util.module_from_spec(spec)
    sys.modules[module_name] = module
    try:
        spec.loader.exec_module(module)
    except BaseException:
        sys.modules.pop(module_name, None)
        raise

    logger.debug("Loaded {} as {}", module_path, module_name)
    return module


def _find_source(path: Path) -> Path:
    if path.is_file():
        return path
    if path.is_dir() and (path / "__init__.py").is_file():
        return path / "__init__.py"
    if not path.suffix:
        candidate = path.with_suffix(".py")
        if candidate.is_file():
            return candidate
    msg = f"No script module at {path}"
    raise FileNotFoundError(msg)
