from __future__ import annotations

from typing import Any, Sequence

from .models import AttributeNotFound, NameNotFound, NotFound, RoleNotFound, SemanticLocator


def build_failure_message(
    locator: SemanticLocator,
    result: NotFound,
    hidden_matches: Sequence[Any] = (),
) -> str:
    lines = [f"Didn't find any elements matching semantic locator {locator}."]

    closest = closest_find_text(locator, result)
    count = len(result.elements_found)
    if closest:
        lines.append(f"The closest match was {closest}, which matched {_plural(count, 'element')}.")
        lines.append(_failed_predicate_text(result, "none of them"))
    else:
        lines.append(_failed_predicate_text(result, "no element"))

    if hidden_matches:
        lines.append(
            f"{_plural(len(hidden_matches), 'element')} matching the locator "
            f"{'is' if len(hidden_matches) == 1 else 'are'} hidden from assistive technology "
            "(e.g. aria-hidden or display:none). Search with include_hidden=True to find hidden elements."
        )
    return " ".join(lines)


def closest_find_text(locator: SemanticLocator, result: NotFound) -> str:
    """Render the part of ``locator`` that matched before the failure."""
    pieces = [str(node) for node in result.closest_find]
    matched = len(result.closest_find)
    boundary = len(locator.pre_outer)
    # "outer" is only shown when something after it matched.
    if locator.post_outer and (matched > boundary or (matched == boundary and result.partial_find is not None)):
        pieces.insert(boundary, "outer")
    if result.partial_find is not None:
        pieces.append(str(result.partial_find))
    return " ".join(pieces)


def _failed_predicate_text(result: NotFound, subject: str) -> str:
    failed = result.not_found
    if isinstance(failed, RoleNotFound):
        if subject == "no element":
            return f"No element with role '{failed.role}' was found."
        return f"No element with role '{failed.role}' was found below them."
    if isinstance(failed, AttributeNotFound):
        return f"{subject.capitalize()} had {failed.attribute}."
    if isinstance(failed, NameNotFound):
        return f"{subject.capitalize()} had the accessible name {failed.name}."
    raise TypeError(f"Unknown failure kind: {failed!r}")


def _plural(count: int, noun: str) -> str:
    return f"{count} {noun}" if count == 1 else f"{count} {noun}s"
