"""Command line interface for paramspace."""

from .loading import load_parameter_set, load_symbol

__all__ = ["load_parameter_set", "load_symbol"]
