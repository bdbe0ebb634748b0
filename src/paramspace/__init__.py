"""paramspace: declare, validate and sample parameter spaces.

This package lets callers declare the legal configurations of an algorithm
as a set of typed parameters with conditional dependencies, validate
candidate configurations, and generate grid, random or space-filling
designs for systematic exploration and search.
"""

# Export the public API
from .api import *  # noqa: F403, F401
from .api import __all__, __version__  # noqa: F401
