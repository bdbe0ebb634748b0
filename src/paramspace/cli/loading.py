"""Loading user-declared parameter sets for the CLI.

A parameter set is referenced as ``module.path:name`` or
``path/to/file.py:name``, where ``name`` is a ParameterSet or a zero-argument
callable returning one. Module paths are imported normally first; if that
fails, the project root (default: cwd) is put on sys.path for the import.
"""

from contextlib import contextmanager
from importlib import import_module, util
from pathlib import Path
import logging
import os
import sys
import types
from typing import Any, Optional

from ..parameters import ParameterSet

logger = logging.getLogger(__name__)


@contextmanager
def _prepend_sys_path(path: str):
    """Temporarily put ``path`` first on sys.path."""
    p = str(Path(path).resolve())
    added = p not in sys.path
    if added:
        sys.path.insert(0, p)
    try:
        yield
    finally:
        if added and p in sys.path:
            sys.path.remove(p)


def _module_from_file(pyfile: str) -> types.ModuleType:
    py = Path(pyfile).resolve()
    if not py.exists():
        raise ModuleNotFoundError(f"No such file: {py}")
    spec = util.spec_from_file_location(py.stem, py)
    if spec is None or spec.loader is None:
        raise ModuleNotFoundError(f"Could not load module from {py}")
    mod = util.module_from_spec(spec)
    spec.loader.exec_module(mod)
    return mod


def _module_from_path(module_part: str, project_root: Optional[str]) -> types.ModuleType:
    try:
        return import_module(module_part)
    except ModuleNotFoundError:
        root = Path(project_root or os.getcwd()).resolve()
        logger.debug(f"Retrying import of {module_part} with {root} on sys.path")
        with _prepend_sys_path(str(root)):
            try:
                return import_module(module_part)
            except ModuleNotFoundError:
                raise ModuleNotFoundError(
                    f"Cannot import '{module_part}' even with project root '{root}' in path"
                ) from None


def load_symbol(qualified: str, project_root: Optional[str] = None) -> Any:
    """Load ``name`` from ``module_or_file:name``.

    Raises:
        ValueError: If the reference has no ':' separator
        ModuleNotFoundError: If the module or file cannot be loaded
        AttributeError: If the module has no such attribute
    """
    module_part, sep, symbol = qualified.partition(":")
    if not sep or not symbol:
        raise ValueError(f"Expected 'module_or_file:name' format, got: {qualified}")

    if module_part.endswith(".py") or "/" in module_part or "\\" in module_part:
        mod = _module_from_file(module_part)
    else:
        mod = _module_from_path(module_part, project_root)

    if not hasattr(mod, symbol):
        raise AttributeError(f"Module {module_part} has no attribute '{symbol}'")
    return getattr(mod, symbol)


def load_parameter_set(qualified: str, project_root: Optional[str] = None) -> ParameterSet:
    """Resolve a reference to a ParameterSet, calling factories as needed.

    Raises:
        TypeError: If the reference resolves to something other than a ParameterSet
    """
    obj = load_symbol(qualified, project_root)
    if not isinstance(obj, ParameterSet) and callable(obj):
        obj = obj()
    if not isinstance(obj, ParameterSet):
        raise TypeError(f"{qualified} is a {type(obj).__name__}, expected a ParameterSet")
    return obj
