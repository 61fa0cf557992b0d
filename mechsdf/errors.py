"""Exceptions raised when a profile cannot be built from its parameters."""

from __future__ import annotations


class ProfileParameterError(ValueError):
    """Raised when profile parameters are invalid.

    ``parameter`` names the violated input (or the derived quantity that
    came out of range, e.g. ``"base_radius"``).
    """

    def __init__(self, parameter: str, message: str) -> None:
        super().__init__(f"{parameter}: {message}")
        self.parameter = parameter


class CamDesignNotImplementedError(ProfileParameterError, NotImplementedError):
    """Raised for cam types that have no closed-form design mapping."""
