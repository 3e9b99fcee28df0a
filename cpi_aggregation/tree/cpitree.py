"""CPI tree wrapper pairing a classification tree with its backing data."""

from typing import Dict, Optional, Sequence, Tuple
import numpy as np
import pandas as pd
import logging

from .nodes import Node, find
from .builder import build_tree
from .index import compute_index, compute_index_cached
from ..config.constants import DEFAULT_CHARACTERS, ROOT_CODE, ROOT_NAME
from ..config.settings import Settings
from ..data.bases import FullCPIBase
from ..data.schemas import validate_groups

logger = logging.getLogger(__name__)


class CPITree:
    """Classification tree of a CPI together with the data of its items.

    Indexing by code returns a new CPITree rooted at that node which shares
    the same base; the original tree is never modified.
    """

    def __init__(self,
                 base: FullCPIBase,
                 tree: Node,
                 group_names: Sequence[str],
                 group_codes: Sequence[str]):
        """Initialize the wrapper.

        Args:
            base: Backing table with the item series
            tree: Root node of the hierarchy
            group_names: Names of the groups used to build the tree
            group_codes: Codes matching ``group_names`` by position
        """
        self.base = base
        self.tree = tree
        self.group_names = list(group_names)
        self.group_codes = list(group_codes)

    @classmethod
    def from_groups(cls,
                    base: FullCPIBase,
                    groups: pd.DataFrame,
                    characters: Sequence[int] = DEFAULT_CHARACTERS,
                    root_code: str = ROOT_CODE,
                    root_name: str = ROOT_NAME,
                    settings: Optional[Settings] = None) -> "CPITree":
        """Build the tree of ``base`` from its item codes.

        Args:
            base: Backing table; its codes describe the hierarchy
            groups: Group vocabulary with code and name columns (by position)
            characters: Prefix lengths per hierarchy level
            root_code: Code of the synthetic root node
            root_name: Name of the synthetic root node
            settings: Settings whose characters and root labels replace the
                three arguments above; checked with ``validate`` first

        Returns:
            CPITree rooted at the synthetic root node
        """
        if settings is not None:
            settings.validate()
            characters = settings.characters
            root_code = settings.root_code
            root_name = settings.root_name

        groups = validate_groups(groups)
        group_codes = groups["code"].tolist()
        group_names = groups["name"].tolist()

        tree = build_tree(
            base.codes,
            characters,
            group_names,
            group_codes,
            base,
            root_code=root_code,
            root_name=root_name
        )
        return cls(base, tree, group_names, group_codes)

    def find(self, code: str) -> Optional[Node]:
        """Node with ``code`` in this tree, or None."""
        return find(self.tree, code)

    def __getitem__(self, code: str) -> Optional["CPITree"]:
        node = self.find(code)
        if node is None:
            return None
        return CPITree(self.base, node, self.group_names, self.group_codes)

    @property
    def children(self) -> Tuple[Node, ...]:
        return self.tree.children

    def compute_index(self, code: Optional[str] = None) -> Optional[np.ndarray]:
        """Price index of the node with ``code``, or of the root if omitted.

        Returns None when ``code`` is not in the tree.
        """
        node = self.tree if code is None else self.find(code)
        if node is None:
            return None
        return compute_index(node, self.base)

    def compute_index_cached(self,
                             cache: Dict[str, np.ndarray],
                             code: Optional[str] = None) -> Optional[np.ndarray]:
        """Memoized variant of :meth:`compute_index` using the caller's ``cache``."""
        node = self.tree if code is None else self.find(code)
        if node is None:
            return None
        return compute_index_cached(cache, node, self.base)

    def to_series(self, code: Optional[str] = None) -> Optional[pd.Series]:
        """Price index of a node as a Series indexed by date."""
        node = self.tree if code is None else self.find(code)
        if node is None:
            return None
        return pd.Series(compute_index(node, self.base), index=self.base.dates, name=node.code)

    def __repr__(self) -> str:
        return f"CPITree({self.tree}) with data {self.base!r}"
