from __future__ import annotations

import logging
from typing import Any, Sequence

from .models import (
    AttributeNotFound,
    Found,
    NameNotFound,
    NotFound,
    PartialFind,
    Result,
    RoleNotFound,
    SemanticNode,
)
from .tree import AccessibilityTree, assert_in_document_order, outer_nodes_only

logger = logging.getLogger("semloc.resolve")


def find_by_semantic_nodes(
    nodes: Sequence[SemanticNode],
    search_base: Sequence[Any],
    tree: AccessibilityTree,
    include_hidden: bool = False,
) -> Result:
    """Narrow ``search_base`` through ``nodes``, stopping at the first node that matches nothing."""
    base: tuple[Any, ...] = tuple(search_base)
    for index, node in enumerate(nodes):
        result = find_by_semantic_node(node, base, tree, include_hidden)
        if isinstance(result, NotFound):
            logger.debug("Node %d (%s) matched nothing: %s", index, node, result.not_found)
            return NotFound(
                closest_find=tuple(nodes[:index]),
                elements_found=result.elements_found,
                not_found=result.not_found,
                partial_find=result.partial_find,
            )
        base = result.elements
    return Found(base)


def find_by_semantic_node(
    node: SemanticNode,
    search_base: Sequence[Any],
    tree: AccessibilityTree,
    include_hidden: bool = False,
) -> Result:
    # Searching below an ancestor already covers its descendants, and
    # disjoint bases keep the concatenated results in document order.
    base = outer_nodes_only(search_base, tree)

    elements: list[Any] = []
    for element in base:
        elements.extend(tree.find_by_role(node.role, element, include_hidden))
    if not elements:
        return NotFound(closest_find=(), elements_found=tuple(base), not_found=RoleNotFound(node.role))

    for index, attribute in enumerate(node.attributes):
        filtered = [element for element in elements if tree.attribute_value(element, attribute.name) == attribute.value]
        if not filtered:
            return NotFound(
                closest_find=(),
                elements_found=tuple(elements),
                not_found=AttributeNotFound(attribute),
                partial_find=PartialFind(node.role, node.attributes[:index]),
            )
        elements = filtered

    if node.name is not None:
        filtered = [element for element in elements if node.name.matches(tree.accessible_name(element))]
        if not filtered:
            return NotFound(
                closest_find=(),
                elements_found=tuple(elements),
                not_found=NameNotFound(node.name),
                partial_find=PartialFind(node.role, node.attributes),
            )
        elements = filtered

    assert_in_document_order(elements, tree)
    return Found(tuple(elements))
