"""
TreeClone — syntax-tree clone detector for copy-paste and
structurally repeated code.

Copyright (c) 2026 Den Rozhnovskiy
Licensed under the MIT License.
"""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("treeclone")
except PackageNotFoundError:
    __version__ = "dev"

__all__ = ["__version__"]
