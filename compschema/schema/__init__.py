from .entry import Pattern, SchemaEntry, TupleField

__all__ = ["Pattern", "SchemaEntry", "TupleField"]
