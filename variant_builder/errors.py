"""Error hierarchy for descriptor derivation.

Every error is fatal to the single variant call that raised it; callers may
retry the whole call (scans and cloning have no side effects).
"""

from __future__ import annotations


class VariantBuilderError(Exception):
    """Base class for all errors raised by variant_builder."""


class FilesystemError(VariantBuilderError, OSError):
    """A source, demo or plugin directory is missing or unreadable."""


class ResourceExhaustedError(VariantBuilderError):
    """No usable port could be bound."""


class ConfigurationError(VariantBuilderError, ValueError):
    """Invalid arguments or project metadata."""
