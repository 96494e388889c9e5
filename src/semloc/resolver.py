from __future__ import annotations

import logging
from typing import Any, Sequence

from .matcher import find_by_semantic_nodes
from .models import Found, NotFound, Result, SemanticLocator
from .tree import AccessibilityTree, outer_nodes_only, remove_duplicates, sort_document_order

logger = logging.getLogger("semloc.resolve")


def find_by_semantic_locator(
    locator: SemanticLocator,
    root: Any,
    tree: AccessibilityTree,
    include_hidden: bool = False,
) -> Result:
    """Resolve ``locator`` below ``root`` and return every match in document order.

    ``outer`` is relative to each element matched by the nodes before it, so
    the nodes after it are matched once per base element. Each base yields
    only its outermost matches; the per-base sets are then merged.
    """
    search_base = find_by_semantic_nodes(locator.pre_outer, [root], tree, include_hidden)
    if isinstance(search_base, NotFound) or not locator.post_outer:
        _log_result(locator, search_base, include_hidden)
        return search_base

    results = [
        find_by_semantic_nodes(locator.post_outer, [base], tree, include_hidden)
        for base in search_base.elements
    ]
    elements: list[Any] = []
    failures: list[NotFound] = []
    for result in results:
        if isinstance(result, NotFound):
            failures.append(result)
        else:
            elements.extend(outer_nodes_only(result.elements, tree))

    if not elements:
        none_found = combine_most_specific(failures)
        merged = NotFound(
            closest_find=locator.pre_outer + none_found.closest_find,
            elements_found=none_found.elements_found,
            not_found=none_found.not_found,
            partial_find=none_found.partial_find,
        )
        _log_result(locator, merged, include_hidden)
        return merged

    # Nested bases reach the same element more than once, and sets from
    # different bases are not interleaved in document order.
    found = Found(tuple(remove_duplicates(sort_document_order(elements, tree))))
    _log_result(locator, found, include_hidden)
    return found


def combine_most_specific(failures: Sequence[NotFound]) -> NotFound:
    """Pick the failure that got furthest: longest closest find, then longest partial find."""
    if not failures:
        raise ValueError("combine_most_specific requires at least one failure.")
    best = failures[0]
    for failure in failures[1:]:
        if _specificity(failure) > _specificity(best):
            best = failure
    return best


def _specificity(failure: NotFound) -> tuple[int, int]:
    partial = -1 if failure.partial_find is None else len(failure.partial_find.attributes)
    return len(failure.closest_find), partial


def _log_result(locator: SemanticLocator, result: Result, include_hidden: bool) -> None:
    if not logger.isEnabledFor(logging.DEBUG):
        return
    if isinstance(result, Found):
        logger.debug("%s matched %d element(s) (include_hidden=%s)", locator, len(result.elements), include_hidden)
    else:
        logger.debug(
            "%s matched nothing after %d node(s) (include_hidden=%s): %s",
            locator,
            len(result.closest_find),
            include_hidden,
            result.not_found,
        )
