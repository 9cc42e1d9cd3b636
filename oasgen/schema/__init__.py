"""Schema fragment writers for wrapped values and scalar types."""

from .scalars import SCALAR_SCHEMAS, add_scalar_type, scalar_schema
from .translator import ValueTranslator

__all__ = ["SCALAR_SCHEMAS", "ValueTranslator", "add_scalar_type", "scalar_schema"]
