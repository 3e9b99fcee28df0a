"""CPI data containers and validation."""

from .schemas import (
    item_schema,
    group_schema,
    validate_items,
    validate_groups
)
from .bases import (
    FullCPIBase,
    VarCPIBase,
    IndexCPIBase
)
from .country import CountryStructure

__all__ = [
    "item_schema",
    "group_schema",
    "validate_items",
    "validate_groups",
    "FullCPIBase",
    "VarCPIBase",
    "IndexCPIBase",
    "CountryStructure"
]
