"""Domain service flattening the middleware entity tree."""

from typing import List, Sequence

from vzgrafana.domain.entities.entity import EntityNode, FlatEntity


def _qualified_title(title: str, parent: str) -> str:
    if not parent:
        return title
    return f"{title} ({parent})"


def _collect(
    result: List[FlatEntity], nodes: Sequence[EntityNode], parent: str
) -> None:
    for node in nodes:
        if node.is_group:
            # the innermost group qualifies its leaves
            _collect(result, node.children, node.title)
        else:
            result.append(FlatEntity(node.id, _qualified_title(node.title, parent)))


def flatten_entities(
    nodes: Sequence[EntityNode], parent: str = ""
) -> List[FlatEntity]:
    """
    Flatten an entity tree into its leaves, depth-first pre-order.

    Leaves nested in a group get the group's title appended in parentheses;
    groups themselves are never emitted.

    Args:
        nodes: Top level nodes of the tree
        parent: Qualifier for the top level leaves, empty for none

    Returns:
        One flat entity per leaf
    """
    result: List[FlatEntity] = []
    _collect(result, nodes, parent)
    return result
