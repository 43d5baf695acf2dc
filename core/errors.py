# ================================
# file: core/errors.py
# ================================
"""Exception taxonomy for exploration runs."""
from __future__ import annotations


class ExplorationError(Exception):
    """Base class for exploration failures."""


class OutOfRangeError(ExplorationError):
    """Start cell too close to the arena edge for the 3x3 footprint."""


class OutOfBoundsError(ExplorationError):
    """A forward move would push the footprint outside the arena."""


class NoLayoutError(ExplorationError):
    """Exploration requested before an arena layout was loaded."""


class DescriptorIOError(ExplorationError):
    """Arena descriptor could not be read or written."""
