"""Exception types for babel-julia."""

from __future__ import annotations


class BabelJuliaError(Exception):
    """Base exception for babel-julia."""


class ConfigurationError(BabelJuliaError):
    """Raised when settings fail validation."""


class InvalidVariableError(BabelJuliaError):
    """Raised when a variable name cannot be bound in Julia."""


class SessionError(BabelJuliaError):
    """Raised when text cannot be routed to a Julia session."""
