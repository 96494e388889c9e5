from __future__ import annotations

from dataclasses import dataclass, field
import re
from typing import Any

from .errors import InvalidLocatorError

SUPPORTED_ATTRIBUTES = (
    "checked",
    "current",
    "disabled",
    "expanded",
    "level",
    "pressed",
    "readonly",
    "selected",
)

WILDCARD = "*"


def normalize_name(value: str | None) -> str:
    if not value:
        return ""
    return re.sub(r"\s+", " ", str(value)).strip()


@dataclass(frozen=True, slots=True)
class NameMatcher:
    """Accessible-name predicate.

    ``'Save'`` is an exact match, ``'Save*'`` a prefix match, ``'*changes'`` a
    suffix match and ``'*ave chan*'`` a substring match. Both sides are
    whitespace-normalised before comparing.
    """

    pattern: str

    @property
    def prefix_wildcard(self) -> bool:
        return len(self.pattern) > 1 and self.pattern.startswith(WILDCARD)

    @property
    def suffix_wildcard(self) -> bool:
        return len(self.pattern) > 1 and self.pattern.endswith(WILDCARD)

    @property
    def literal(self) -> str:
        text = self.pattern
        if self.prefix_wildcard:
            text = text[1:]
        if self.suffix_wildcard:
            text = text[:-1]
        return normalize_name(text)

    def matches(self, computed_name: str | None) -> bool:
        actual = normalize_name(computed_name)
        expected = self.literal
        if self.prefix_wildcard and self.suffix_wildcard:
            return expected in actual
        if self.prefix_wildcard:
            return actual.endswith(expected)
        if self.suffix_wildcard:
            return actual.startswith(expected)
        return actual == expected

    def __str__(self) -> str:
        escaped = self.pattern.replace("\\", "\\\\").replace("'", "\\'")
        return f"'{escaped}'"


@dataclass(frozen=True, slots=True)
class Attribute:
    name: str
    value: str

    def __str__(self) -> str:
        return f"{self.name}:{self.value}"


@dataclass(frozen=True, slots=True)
class SemanticNode:
    role: str
    attributes: tuple[Attribute, ...] = ()
    name: NameMatcher | None = None

    def __post_init__(self) -> None:
        if not self.role:
            raise InvalidLocatorError("Semantic node requires a role.")
        for attribute in self.attributes:
            if attribute.name not in SUPPORTED_ATTRIBUTES:
                raise InvalidLocatorError(
                    f"Unsupported attribute '{attribute.name}'. "
                    f"Supported attributes: {', '.join(SUPPORTED_ATTRIBUTES)}."
                )

    def __str__(self) -> str:
        return render_node(self.role, self.attributes, self.name)

    def to_dict(self) -> dict[str, Any]:
        return {
            "role": self.role,
            "attributes": [{"name": attr.name, "value": attr.value} for attr in self.attributes],
            "name": self.name.pattern if self.name else None,
        }


@dataclass(frozen=True, slots=True)
class SemanticLocator:
    pre_outer: tuple[SemanticNode, ...]
    post_outer: tuple[SemanticNode, ...] = ()

    def __post_init__(self) -> None:
        if not self.pre_outer:
            raise InvalidLocatorError("Semantic locator requires at least one node before 'outer'.")

    @property
    def has_outer(self) -> bool:
        return bool(self.post_outer)

    def __str__(self) -> str:
        pre = " ".join(str(node) for node in self.pre_outer)
        if not self.post_outer:
            return pre
        post = " ".join(str(node) for node in self.post_outer)
        return f"{pre} outer {post}"


def render_node(role: str, attributes: tuple[Attribute, ...] = (), name: NameMatcher | None = None) -> str:
    pieces = [role]
    if name is not None:
        pieces.append(str(name))
    pieces.extend(str(attribute) for attribute in attributes)
    return "{" + " ".join(pieces) + "}"


@dataclass(frozen=True, slots=True)
class RoleNotFound:
    role: str


@dataclass(frozen=True, slots=True)
class AttributeNotFound:
    attribute: Attribute


@dataclass(frozen=True, slots=True)
class NameNotFound:
    name: NameMatcher


FailedPredicate = RoleNotFound | AttributeNotFound | NameNotFound


@dataclass(frozen=True, slots=True)
class PartialFind:
    role: str
    attributes: tuple[Attribute, ...] = ()

    def __str__(self) -> str:
        return render_node(self.role, self.attributes)


@dataclass(frozen=True, slots=True)
class Found:
    elements: tuple[Any, ...]


@dataclass(frozen=True, slots=True)
class NotFound:
    closest_find: tuple[SemanticNode, ...]
    elements_found: tuple[Any, ...]
    not_found: FailedPredicate
    partial_find: PartialFind | None = field(default=None)


Result = Found | NotFound
