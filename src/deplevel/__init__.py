"""deplevel: dependency-ordered leveling for parallel batch processing."""

from __future__ import annotations

__version__ = "0.1.0"
__license__ = "MIT"
