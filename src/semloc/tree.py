from __future__ import annotations

from functools import cmp_to_key
from typing import Any, Iterable, Protocol, Sequence, TypeVar

from .errors import DocumentOrderError

NodeT = TypeVar("NodeT")


class AccessibilityTree(Protocol):
    """Accessibility computations a tree backend supplies to the matcher.

    Nodes are opaque to the matcher and compared by identity.
    """

    def find_by_role(self, role: str, base: Any, include_hidden: bool) -> Sequence[Any]:
        """Descendants of ``base`` whose computed role is ``role``, in document order."""
        ...

    def attribute_value(self, node: Any, name: str) -> str | None:
        ...

    def accessible_name(self, node: Any) -> str:
        ...

    def compare_order(self, first: Any, second: Any) -> int:
        """Negative when ``first`` precedes ``second`` in document order."""
        ...

    def contains(self, ancestor: Any, node: Any) -> bool:
        """True when ``ancestor`` is a proper ancestor of ``node``."""
        ...


def outer_nodes_only(nodes: Sequence[NodeT], tree: AccessibilityTree) -> list[NodeT]:
    """Drop every node that has another member of ``nodes`` as an ancestor."""
    return [
        node
        for node in nodes
        if not any(other is not node and tree.contains(other, node) for other in nodes)
    ]


def sort_document_order(nodes: Iterable[NodeT], tree: AccessibilityTree) -> list[NodeT]:
    return sorted(nodes, key=cmp_to_key(tree.compare_order))


def remove_duplicates(nodes: Iterable[NodeT]) -> list[NodeT]:
    seen: set[int] = set()
    unique: list[NodeT] = []
    for node in nodes:
        key = id(node)
        if key in seen:
            continue
        seen.add(key)
        unique.append(node)
    return unique


def assert_in_document_order(nodes: Sequence[Any], tree: AccessibilityTree) -> None:
    for index in range(1, len(nodes)):
        if tree.compare_order(nodes[index - 1], nodes[index]) >= 0:
            raise DocumentOrderError(
                f"Elements at positions {index - 1} and {index} are not in strictly increasing document order."
            )
