"""Price index computation for nodes of the CPI classification tree."""

from typing import Dict, Optional
import numpy as np
import logging

from .nodes import Item, Group, Node
from ..data.bases import FullCPIBase

logger = logging.getLogger(__name__)


def _weighted_index(node: Group, child_indices: list) -> np.ndarray:
    """Combine the children's indices of ``node`` into the group index."""
    if len(child_indices) == 1:
        return child_indices[0]

    ipcs = np.column_stack(child_indices)
    weights = np.array([child.weight for child in node.children], dtype=float)
    return ipcs @ weights / weights.sum()


def compute_index(node: Optional[Node], base: FullCPIBase) -> Optional[np.ndarray]:
    """Compute the price index of ``node`` from the item series in ``base``.

    Items take their column of index levels from ``base``. Groups take the
    weighted average of their children's indices, with weights normalized
    at each level; a group with a single child shares its child's index.

    Args:
        node: Tree node, or None for a node that was not found
        base: Backing table with the item index levels

    Returns:
        Index vector with one value per period of ``base``, or None when
        ``node`` is None
    """
    if node is None:
        logger.warning("Node not available in the tree structure")
        return None

    if isinstance(node, Item):
        return base.index_for(node.code)

    return _weighted_index(node, [compute_index(child, base) for child in node.children])


def compute_index_cached(cache: Dict[str, np.ndarray],
                         node: Optional[Node],
                         base: FullCPIBase) -> Optional[np.ndarray]:
    """Compute the price index of ``node``, memoizing every visited node.

    Same computation as :func:`compute_index`. Indices already present in
    ``cache`` under a node's code are returned without recomputation; every
    node computed here, including ``node`` itself, is stored in ``cache``.
    The cache belongs to the caller and is not synchronized.

    Args:
        cache: Mapping from node code to index vector, updated in place
        node: Tree node, or None for a node that was not found
        base: Backing table with the item index levels

    Returns:
        Index vector of ``node``, or None when ``node`` is None
    """
    if node is None:
        logger.warning("Node not available in the tree structure")
        return None

    if node.code in cache:
        return cache[node.code]

    if isinstance(node, Item):
        cache[node.code] = base.index_for(node.code)
        return cache[node.code]

    child_indices = [compute_index_cached(cache, child, base) for child in node.children]
    cache[node.code] = _weighted_index(node, child_indices)
    return cache[node.code]
