"""Configuration handling for paramspace.

Reads defaults for the CLI from the ``[tool.paramspace]`` table of
``pyproject.toml``:

    [tool.paramspace]
    resolution = 5        # grid points per numeric parameter
    seed = 42             # seed for sample/design commands
    method = "lhs"        # random | lhs | sobol | hierarchical
    log_level = "INFO"
"""

import logging
import tomllib
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, List, Optional

from .constants import DEFAULT_RESOLUTION, DESIGN_METHODS

logger = logging.getLogger(__name__)

SAMPLE_METHODS = DESIGN_METHODS + ("hierarchical",)
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class Settings:
    """Defaults used by the command line interface.

    Attributes:
        resolution: Grid points per numeric parameter
        seed: Seed for random designs (None = fresh entropy)
        method: Default design method for the sample command
        log_level: Logging level configured by the CLI
    """
    resolution: int = DEFAULT_RESOLUTION
    seed: Optional[int] = None
    method: str = "hierarchical"
    log_level: str = "WARNING"


def read_pyproject(root: Optional[Path] = None) -> Dict[str, Any]:
    """Read the ``[tool.paramspace]`` table.

    Args:
        root: Directory holding pyproject.toml (default: current directory)

    Returns:
        The table, or an empty dict if the file or table is missing

    Raises:
        tomllib.TOMLDecodeError: If TOML is malformed
    """
    pyproject_path = Path(root or Path.cwd()) / "pyproject.toml"
    if not pyproject_path.exists():
        return {}

    with open(pyproject_path, "rb") as f:
        data = tomllib.load(f)

    return data.get("tool", {}).get("paramspace", {})


def validate_settings(config: Dict[str, Any]) -> List[str]:
    """Validate a ``[tool.paramspace]`` table.

    Returns:
        List of validation error messages (empty if valid)
    """
    errors = []
    known = {f.name for f in fields(Settings)}
    for key in config:
        if key not in known:
            errors.append(f"Unknown setting: {key}")

    resolution = config.get("resolution", DEFAULT_RESOLUTION)
    if isinstance(resolution, bool) or not isinstance(resolution, int) or resolution < 1:
        errors.append(f"resolution must be a positive integer, got {resolution!r}")

    seed = config.get("seed")
    if seed is not None and (isinstance(seed, bool) or not isinstance(seed, int) or seed < 0):
        errors.append(f"seed must be a non-negative integer, got {seed!r}")

    method = config.get("method", "hierarchical")
    if method not in SAMPLE_METHODS:
        errors.append(f"method must be one of {list(SAMPLE_METHODS)}, got {method!r}")

    level = str(config.get("log_level", "WARNING")).upper()
    if level not in LOG_LEVELS:
        errors.append(f"log_level must be one of {list(LOG_LEVELS)}, got {config.get('log_level')!r}")

    return errors


def load_settings(root: Optional[Path] = None) -> Settings:
    """Load and validate settings from pyproject.toml.

    Raises:
        ValueError: If the table holds invalid settings
    """
    config = read_pyproject(root)
    errors = validate_settings(config)
    if errors:
        raise ValueError("Invalid [tool.paramspace] configuration: " + "; ".join(errors))

    settings = Settings(
        resolution=config.get("resolution", DEFAULT_RESOLUTION),
        seed=config.get("seed"),
        method=config.get("method", "hierarchical"),
        log_level=str(config.get("log_level", "WARNING")).upper(),
    )
    logger.debug(f"Loaded settings: {settings}")
    return settings
