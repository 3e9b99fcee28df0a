"""Hierarchical CPI classification tree.

This module provides functionality for:
- Item and group nodes with derived group weights
- Tree construction from item codes and a prefix-length hierarchy
- Lookup of nodes by classification code
- Weighted index aggregation, with optional memoization
"""

from .nodes import Item, Group, Node, find, iter_nodes
from .builder import build_tree, build_nodes, validate_characters
from .index import compute_index, compute_index_cached
from .cpitree import CPITree

__all__ = [
    'Item',
    'Group',
    'Node',
    'find',
    'iter_nodes',
    'build_tree',
    'build_nodes',
    'validate_characters',
    'compute_index',
    'compute_index_cached',
    'CPITree'
]
