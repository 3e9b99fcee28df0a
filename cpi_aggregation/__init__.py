"""
CPI Aggregation: hierarchical consumer price index trees and inflation splicing

This package builds classification trees of CPI items and groups, computes
weighted group indices from base-period data, and splices inflation measures
across consecutive base periods.
"""

__version__ = "0.1.0"
__author__ = "CPI Aggregation Implementation Team"

from .config import constants
from .data import schemas, FullCPIBase, VarCPIBase, IndexCPIBase, CountryStructure
from .tree import Item, Group, CPITree, build_tree, compute_index, compute_index_cached
from .inflation import InflationFunction, InflationSplice, InflationTotalCPI, InflationCombination

__all__ = [
    "constants",
    "schemas",
    "FullCPIBase",
    "VarCPIBase",
    "IndexCPIBase",
    "CountryStructure",
    "Item",
    "Group",
    "CPITree",
    "build_tree",
    "compute_index",
    "compute_index_cached",
    "InflationFunction",
    "InflationSplice",
    "InflationTotalCPI",
    "InflationCombination"
]
