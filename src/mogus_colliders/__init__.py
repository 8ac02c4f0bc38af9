"""Wall collider generation for tile-based platformer levels."""

from .__about__ import __version__

__all__ = ["__version__"]
