"""Error types raised by the dispersion pipeline."""

from __future__ import annotations


class ConfigurationError(ValueError):
    """Invalid structure, unit system or parameter combination."""


class NumericalError(RuntimeError):
    """Eigensolver failure or a matrix unfit for a symmetric solve."""
