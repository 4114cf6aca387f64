"""Tide report extraction pipeline for horaire-maree.fr."""

from .version import __version__

__all__ = ["__version__"]
