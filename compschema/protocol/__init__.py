from .descriptors import FieldDef, Framing, Kind, ValueType
from .wire import WireType, array_of, option_of

__all__ = [
    "FieldDef", "Framing", "Kind", "ValueType",
    "WireType", "array_of", "option_of",
]
