"""Construction of the CPI classification tree from item codes."""

from typing import Dict, List, Sequence, Tuple
import logging

from .nodes import Item, Group, Node
from ..config.constants import ROOT_CODE, ROOT_NAME, GROUP_PLACEHOLDER
from ..data.bases import FullCPIBase
from ..utils.exceptions import TreeConstructionError

logger = logging.getLogger(__name__)


def validate_characters(characters: Sequence[int]) -> Tuple[int, ...]:
    """Check the hierarchy definition given as prefix lengths per level.

    Args:
        characters: Number of significant code characters at each depth,
            e.g. (3, 4, 5, 7) for division, group, subgroup and item

    Returns:
        The prefix lengths as a tuple

    Raises:
        TreeConstructionError: With fewer than two levels or lengths that
            are not strictly ascending
    """
    characters = tuple(characters)
    if len(characters) < 2:
        raise TreeConstructionError("`characters` must contain at least two values")
    for i in range(1, len(characters)):
        if characters[i] <= characters[i - 1]:
            raise TreeConstructionError(
                f"Values in `characters` must be ascending up to the length of the item codes; "
                f"position {i} has {characters[i]} after {characters[i - 1]}"
            )
    return characters


def build_nodes(codes: Sequence[str],
                characters: Tuple[int, ...],
                base: FullCPIBase,
                group_names: Dict[str, str],
                depth: int = 0,
                prefix: str = "") -> List[Node]:
    """Build the list of nodes below ``prefix`` at hierarchy level ``depth``.

    Args:
        codes: Item codes of the base
        characters: Validated prefix lengths per level
        base: Backing table supplying item names and weights
        group_names: Group vocabulary, mapping group code to name
        depth: Current level in ``characters``
        prefix: Code prefix shared by every node returned

    Returns:
        Items when ``depth`` is the last level, groups otherwise
    """
    available = [code for code in codes if code.startswith(prefix)]
    chars = characters[depth]

    if chars == characters[-1]:
        return [
            Item(code, base.name_for(code), base.weight_for(code))
            for code in available
        ]

    # distinct prefixes in first-seen order
    possibles = list(dict.fromkeys(code[:chars] for code in available))

    groups = []
    for prefix_code in possibles:
        children = build_nodes(codes, characters, base, group_names,
                               depth=depth + 1, prefix=prefix_code)
        logger.debug(f"Prefix code: {prefix_code} ({len(children)} children)")

        name = group_names.get(prefix_code)
        if name is None:
            logger.warning(f"Group code {prefix_code} not found in group vocabulary. "
                           f"Using generic name.")
            name = GROUP_PLACEHOLDER.format(code=prefix_code)

        groups.append(Group(prefix_code, name, children))

    return groups


def build_tree(codes: Sequence[str],
               characters: Sequence[int],
               group_names: Sequence[str],
               group_codes: Sequence[str],
               base: FullCPIBase,
               root_code: str = ROOT_CODE,
               root_name: str = ROOT_NAME) -> Group:
    """Build the complete classification tree of ``base``.

    The item codes describe the hierarchy: the first ``characters[0]``
    characters identify the top level, the first ``characters[1]`` the
    next one, and so on down to the full item code.

    Args:
        codes: Item codes, usually ``base.codes``
        characters: Prefix lengths per level, strictly ascending
        group_names: Names of every group that may appear
        group_codes: Codes matching ``group_names`` by position
        base: Backing table supplying item names and weights
        root_code: Code of the synthetic root node
        root_name: Name of the synthetic root node

    Returns:
        Root group containing the whole hierarchy
    """
    characters = validate_characters(characters)
    if len(group_names) != len(group_codes):
        raise TreeConstructionError(
            f"Group names ({len(group_names)}) and codes ({len(group_codes)}) must have the same length"
        )

    # first occurrence wins, like a positional lookup
    vocabulary = {}
    for code, name in zip(group_codes, group_names):
        vocabulary.setdefault(str(code), str(name))

    codes = [str(code) for code in codes]
    logger.debug(f"Building tree for {len(codes)} item codes with characters={characters}")

    upper_nodes = build_nodes(codes, characters, base, vocabulary)
    tree = Group(root_code, root_name, upper_nodes)

    logger.info(f"Built CPI tree {root_code} with {len(upper_nodes)} top-level groups "
                f"and total weight {tree.weight:.4f}")
    return tree
