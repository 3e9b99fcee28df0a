"""Nodes of the CPI classification tree.

The tree has two node kinds: :class:`Item` for elementary expenditure items
(leaves) and :class:`Group` for every aggregation level above them. Nodes
hold codes, names and weights only; numeric series live in the backing
:class:`~cpi_aggregation.data.FullCPIBase`.
"""

from dataclasses import dataclass, field
from typing import Iterator, Optional, Sequence, Tuple, Union
import logging

from ..utils.exceptions import TreeConstructionError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Item:
    """Elementary expenditure item, the lowest level of the tree.

    Attributes:
        code: Classification code of the item
        name: Description of the item
        weight: Share of the item in the consumption basket
    """

    code: str
    name: str
    weight: float

    def __post_init__(self):
        if self.weight < 0:
            raise TreeConstructionError(
                f"Item {self.code} must have a non-negative weight, got: {self.weight}"
            )

    @property
    def children(self) -> Tuple[()]:
        return ()

    def __getitem__(self, code: str) -> Optional["Node"]:
        return find(self, code)

    def __str__(self) -> str:
        return f"{self.code}: {self.name} [{self.weight}]"


@dataclass(frozen=True)
class Group:
    """Aggregation node of any level above the elementary items.

    The weight is not a constructor argument: it is the sum of the
    children's weights, fixed when the group is created.

    Attributes:
        code: Classification code of the group
        name: Description of the group
        children: Child nodes, either items or lower-level groups
        weight: Sum of the children's weights
    """

    code: str
    name: str
    children: Tuple["Node", ...]
    weight: float = field(init=False)

    def __post_init__(self):
        children = tuple(self.children)
        if not children:
            raise TreeConstructionError(f"Group {self.code} must have at least one child")
        for child in children:
            if not isinstance(child, (Item, Group)):
                raise TreeConstructionError(
                    f"Children of group {self.code} must be Item or Group nodes, "
                    f"got: {type(child).__name__}"
                )
        object.__setattr__(self, "children", children)
        object.__setattr__(self, "weight", sum(child.weight for child in children))

    @classmethod
    def of(cls, code: str, name: str, *children: "Node") -> "Group":
        """Create a group from children passed as positional arguments."""
        return cls(code, name, children)

    def __getitem__(self, code: str) -> Optional["Node"]:
        return find(self, code)

    def __str__(self) -> str:
        return f"{self.code}: {self.name} [{self.weight}]"


Node = Union[Item, Group]


def find(node: Optional[Node], code: str) -> Optional[Node]:
    """Look up the node with ``code`` below ``node``.

    Group codes are prefixes of their descendants' codes, so the search
    descends into the single child whose code prefixes ``code``.

    Args:
        node: Node to search from
        code: Classification code to look for

    Returns:
        The matching node, or None if no node in the subtree has ``code``
    """
    if node is None:
        return None
    if node.code == code:
        return node

    for child in node.children:
        if child.code == code:
            return child
    for child in node.children:
        if code.startswith(child.code):
            return find(child, code)

    return None


def iter_nodes(node: Node) -> Iterator[Node]:
    """Pre-order traversal of every node in the subtree of ``node``."""
    yield node
    for child in node.children:
        yield from iter_nodes(child)
