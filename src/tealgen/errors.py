"""Domain-specific errors for tealgen."""

from __future__ import annotations


class TealGenError(Exception):
    """Base error for tealgen."""


class NameEncodingError(TealGenError):
    """Raised when a registered name cannot be rendered as UTF-8 text."""


class UnsupportedTypeError(TealGenError):
    """Raised when a host type has no equivalent in the declaration language."""


class MissingTypeBodyError(TealGenError):
    """Raised when a processed type cannot produce its type generator."""


class GeneratorConsumedError(TealGenError):
    """Raised when a generator is used after `generate()` consumed it."""


class SnapshotEncodeError(TealGenError):
    """Raised when a model cannot be encoded to a snapshot."""


class SnapshotDecodeError(TealGenError):
    """Raised when a snapshot cannot be decoded back into a model."""
