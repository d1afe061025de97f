"""
CompSchema - Errors

Only definition-file problems and output write failures end a run.
Everything else downgrades a single entry (see classifier).
"""

from __future__ import annotations


class CompSchemaError(Exception):
    """Base class for all compschema errors."""


class DescriptorError(CompSchemaError):
    """A value-type descriptor or definition file is malformed."""


class NotEncodableError(CompSchemaError):
    """An encoder cannot serialize the given value (no network form)."""


class SchemaWriteError(CompSchemaError):
    """Writing an output file failed. Fatal for the run."""
