from __future__ import annotations

import logging
from typing import Any

from .diagnostics import build_failure_message
from .errors import NoSuchElementError
from .models import NotFound, Result, SemanticLocator
from .parser import parse
from .resolver import find_by_semantic_locator
from .tree import AccessibilityTree

logger = logging.getLogger("semloc.resolve")

LocatorInput = str | SemanticLocator


def find_all(
    locator: LocatorInput,
    root: Any,
    tree: AccessibilityTree,
    include_hidden: bool = False,
) -> list[Any]:
    """Every element matching ``locator`` below ``root``, in document order. Empty when none match."""
    result = resolve(locator, root, tree, include_hidden)
    if isinstance(result, NotFound):
        return []
    return list(result.elements)


def find_first(
    locator: LocatorInput,
    root: Any,
    tree: AccessibilityTree,
    include_hidden: bool = False,
) -> Any:
    """First element matching ``locator``; raises ``NoSuchElementError`` when there is none."""
    parsed = _as_locator(locator)
    result = find_by_semantic_locator(parsed, root, tree, include_hidden)
    if not isinstance(result, NotFound):
        return result.elements[0]

    hidden_matches: tuple[Any, ...] = ()
    if not include_hidden:
        hidden_result = find_by_semantic_locator(parsed, root, tree, True)
        if not isinstance(hidden_result, NotFound):
            hidden_matches = hidden_result.elements
            logger.info("%s only matches %d hidden element(s)", parsed, len(hidden_matches))

    raise NoSuchElementError(
        build_failure_message(parsed, result, hidden_matches),
        locator=parsed,
        result=result,
        hidden_matches=hidden_matches,
    )


def resolve(
    locator: LocatorInput,
    root: Any,
    tree: AccessibilityTree,
    include_hidden: bool = False,
) -> Result:
    return find_by_semantic_locator(_as_locator(locator), root, tree, include_hidden)


def _as_locator(locator: LocatorInput) -> SemanticLocator:
    if isinstance(locator, SemanticLocator):
        return locator
    return parse(locator)
