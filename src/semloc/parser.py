from __future__ import annotations

import re

from .errors import InvalidLocatorError
from .models import Attribute, NameMatcher, SemanticLocator, SemanticNode

OUTER_KEYWORD = "outer"

_TOKEN_PATTERN = re.compile(
    r"""
    (?P<space>\s+)
    | (?P<open>\{)
    | (?P<close>\})
    | (?P<string>'(?:[^'\\]|\\.)*'|"(?:[^"\\]|\\.)*")
    | (?P<attribute>[A-Za-z][A-Za-z0-9_-]*:[^\s{}'"]+)
    | (?P<word>[A-Za-z][A-Za-z0-9_-]*)
    """,
    re.VERBOSE,
)

Token = tuple[str, str, int]


def parse(locator: str) -> SemanticLocator:
    """Parse locator text such as ``{list} outer {listitem 'Inbox' selected:true}``."""
    text = str(locator or "")
    tokens = _tokenize(text)
    if not tokens:
        raise InvalidLocatorError("Semantic locator is empty.", text, 0)

    pre_outer: list[SemanticNode] = []
    post_outer: list[SemanticNode] = []
    current = pre_outer
    seen_outer = False
    index = 0
    while index < len(tokens):
        kind, value, position = tokens[index]
        if kind == "word" and value == OUTER_KEYWORD:
            if seen_outer:
                raise InvalidLocatorError("Only one 'outer' is allowed per locator.", text, position)
            if not pre_outer:
                raise InvalidLocatorError("'outer' must follow at least one node.", text, position)
            seen_outer = True
            current = post_outer
            index += 1
            continue
        if kind != "open":
            raise InvalidLocatorError(f"Expected '{{' but found {value!r} at position {position}.", text, position)
        node, index = _parse_node(tokens, index + 1, text, position)
        current.append(node)

    if seen_outer and not post_outer:
        raise InvalidLocatorError("'outer' must be followed by at least one node.", text, len(text))
    return SemanticLocator(pre_outer=tuple(pre_outer), post_outer=tuple(post_outer))


def _tokenize(text: str) -> list[Token]:
    tokens: list[Token] = []
    position = 0
    while position < len(text):
        match = _TOKEN_PATTERN.match(text, position)
        if match is None:
            snippet = text[position : position + 12]
            raise InvalidLocatorError(f"Unexpected input {snippet!r} at position {position}.", text, position)
        kind = match.lastgroup or ""
        if kind != "space":
            tokens.append((kind, match.group(), position))
        position = match.end()
    return tokens


def _parse_node(tokens: list[Token], index: int, text: str, open_position: int) -> tuple[SemanticNode, int]:
    if index >= len(tokens):
        raise InvalidLocatorError(f"Unclosed '{{' at position {open_position}.", text, open_position)
    kind, value, position = tokens[index]
    if kind != "word" or value == OUTER_KEYWORD:
        raise InvalidLocatorError(f"Expected a role at position {position}.", text, position)
    role = value.lower()
    index += 1

    name: NameMatcher | None = None
    attributes: list[Attribute] = []
    while True:
        if index >= len(tokens):
            raise InvalidLocatorError(f"Unclosed '{{' at position {open_position}.", text, open_position)
        kind, value, position = tokens[index]
        index += 1
        if kind == "close":
            break
        if kind == "string":
            if name is not None:
                raise InvalidLocatorError(f"Node '{role}' has more than one name.", text, position)
            name = NameMatcher(_unquote(value))
            continue
        if kind == "attribute":
            attr_name, attr_value = value.split(":", 1)
            attributes.append(Attribute(attr_name.lower(), attr_value))
            continue
        raise InvalidLocatorError(f"Unexpected {value!r} inside node at position {position}.", text, position)

    try:
        node = SemanticNode(role=role, attributes=tuple(attributes), name=name)
    except InvalidLocatorError as exc:
        raise InvalidLocatorError(str(exc), text, open_position) from exc
    return node, index


def _unquote(value: str) -> str:
    return re.sub(r"\\(.)", r"\1", value[1:-1])
