from __future__ import annotations

from pathlib import Path
import re
from typing import Any

from bs4 import BeautifulSoup, Comment, NavigableString, Tag

from .models import normalize_name

NEVER_RENDERED_TAGS = {"head", "script", "style", "template", "noscript", "title", "meta", "link"}

NAME_FROM_CONTENT_ROLES = {
    "button",
    "cell",
    "checkbox",
    "columnheader",
    "gridcell",
    "heading",
    "link",
    "menuitem",
    "menuitemcheckbox",
    "menuitemradio",
    "option",
    "radio",
    "row",
    "rowheader",
    "switch",
    "tab",
    "tooltip",
    "treeitem",
}

CHECKABLE_ROLES = {"checkbox", "radio", "switch", "menuitemcheckbox", "menuitemradio"}
SELECTABLE_ROLES = {"option", "tab", "gridcell", "row", "treeitem"}

_IMPLICIT_TAG_ROLES = {
    "article": "article",
    "aside": "complementary",
    "button": "button",
    "datalist": "listbox",
    "details": "group",
    "dialog": "dialog",
    "fieldset": "group",
    "figure": "figure",
    "footer": "contentinfo",
    "form": "form",
    "header": "banner",
    "hr": "separator",
    "li": "listitem",
    "main": "main",
    "menu": "list",
    "meter": "meter",
    "nav": "navigation",
    "ol": "list",
    "optgroup": "group",
    "option": "option",
    "output": "status",
    "progress": "progressbar",
    "section": "region",
    "summary": "button",
    "table": "table",
    "tbody": "rowgroup",
    "td": "cell",
    "textarea": "textbox",
    "tfoot": "rowgroup",
    "th": "columnheader",
    "thead": "rowgroup",
    "tr": "row",
    "ul": "list",
}

_INPUT_TYPE_ROLES = {
    "button": "button",
    "checkbox": "checkbox",
    "email": "textbox",
    "image": "button",
    "number": "spinbutton",
    "radio": "radio",
    "range": "slider",
    "reset": "button",
    "search": "searchbox",
    "submit": "button",
    "tel": "textbox",
    "text": "textbox",
    "url": "textbox",
}

_HEADING_PATTERN = re.compile(r"^h([1-6])$")
_DISPLAY_NONE_PATTERN = re.compile(r"display\s*:\s*none", re.IGNORECASE)
_VISIBILITY_HIDDEN_PATTERN = re.compile(r"visibility\s*:\s*hidden", re.IGNORECASE)


class SoupTree:
    """Accessibility tree over a static BeautifulSoup document.

    bs4 tags compare by value, so every identity check here goes through ``id()``.
    """

    def __init__(self, markup: str | BeautifulSoup, parser: str = "lxml") -> None:
        self.soup = markup if isinstance(markup, BeautifulSoup) else BeautifulSoup(markup, parser)
        self._order: dict[int, int] = {id(tag): index for index, tag in enumerate(self.soup.find_all(True))}

    @classmethod
    def from_file(cls, path: Path | str, parser: str = "lxml") -> SoupTree:
        return cls(Path(path).read_text(encoding="utf-8"), parser)

    @property
    def root(self) -> Tag:
        return self.soup.body or self.soup

    def by_id(self, element_id: str) -> Tag:
        tag = self.soup.find(id=element_id)
        if not isinstance(tag, Tag):
            raise LookupError(f"No element with id '{element_id}'.")
        return tag

    def find_by_role(self, role: str, base: Tag, include_hidden: bool) -> list[Tag]:
        matches: list[Tag] = []
        for tag in base.find_all(True):
            if self.role_of(tag) != role:
                continue
            if not include_hidden and self.is_hidden(tag):
                continue
            matches.append(tag)
        return matches

    def attribute_value(self, node: Tag, name: str) -> str | None:
        explicit = node.get(f"aria-{name}")
        if explicit is not None:
            return str(explicit).strip().lower()

        role = self.role_of(node)
        if name == "checked" and role in CHECKABLE_ROLES:
            return "true" if node.has_attr("checked") else "false"
        if name == "disabled":
            return "true" if self._is_disabled(node) else "false"
        if name == "selected" and role in SELECTABLE_ROLES:
            return "true" if node.has_attr("selected") else "false"
        if name == "readonly" and node.name in {"input", "textarea"}:
            return "true" if node.has_attr("readonly") else "false"
        if name == "level" and role == "heading":
            match = _HEADING_PATTERN.match(node.name or "")
            return match.group(1) if match else "2"
        if name == "expanded" and node.name == "details":
            return "true" if node.has_attr("open") else "false"
        return None

    def accessible_name(self, node: Tag) -> str:
        labelledby = str(node.get("aria-labelledby") or "").split()
        if labelledby:
            chunks = [self._text_content(label) for label in self._tags_by_ids(labelledby)]
            name = normalize_name(" ".join(chunk for chunk in chunks if chunk))
            if name:
                return name

        aria_label = normalize_name(node.get("aria-label"))
        if aria_label:
            return aria_label

        if node.name in {"input", "select", "textarea"}:
            name = self._native_label(node)
            if name:
                return name
        if node.name in {"img", "area"} or (node.name == "input" and node.get("type") == "image"):
            alt = normalize_name(node.get("alt"))
            if alt:
                return alt

        if self.role_of(node) in NAME_FROM_CONTENT_ROLES:
            content = self._text_content(node)
            if content:
                return content

        return normalize_name(node.get("title"))

    def compare_order(self, first: Tag, second: Tag) -> int:
        return self._order.get(id(first), -1) - self._order.get(id(second), -1)

    def contains(self, ancestor: Tag, node: Tag) -> bool:
        return any(parent is ancestor for parent in node.parents)

    def role_of(self, tag: Tag) -> str | None:
        explicit = str(tag.get("role") or "").strip().lower()
        if explicit:
            return explicit.split()[0]

        name = (tag.name or "").lower()
        if _HEADING_PATTERN.match(name):
            return "heading"
        if name in {"a", "area"}:
            return "link" if tag.has_attr("href") else None
        if name == "img":
            return "presentation" if tag.get("alt") == "" else "img"
        if name == "input":
            input_type = str(tag.get("type") or "text").lower()
            return _INPUT_TYPE_ROLES.get(input_type)
        if name == "select":
            multiple = tag.has_attr("multiple") or _int_or_zero(tag.get("size")) > 1
            return "listbox" if multiple else "combobox"
        return _IMPLICIT_TAG_ROLES.get(name)

    def is_hidden(self, tag: Tag) -> bool:
        current: Any = tag
        while isinstance(current, Tag) and current is not self.soup:
            if _hides_subtree(current):
                return True
            current = current.parent
        return False

    def describe(self, node: Tag) -> dict[str, Any]:
        return {
            "tag": node.name,
            "id": node.get("id"),
            "role": self.role_of(node),
            "name": self.accessible_name(node),
        }

    def _is_disabled(self, node: Tag) -> bool:
        if node.has_attr("disabled"):
            return True
        return any(parent.name == "fieldset" and parent.has_attr("disabled") for parent in node.parents)

    def _native_label(self, node: Tag) -> str:
        element_id = node.get("id")
        if element_id:
            label = self.soup.find("label", attrs={"for": element_id})
            if isinstance(label, Tag):
                text = self._text_content(label)
                if text:
                    return text
        for parent in node.parents:
            if parent.name == "label":
                text = self._text_content(parent)
                if text:
                    return text
                break
        if node.name == "input":
            input_type = str(node.get("type") or "text").lower()
            if input_type in {"submit", "reset", "button"}:
                value = normalize_name(node.get("value"))
                if value:
                    return value
                return {"submit": "Submit", "reset": "Reset"}.get(input_type, "")
        return normalize_name(node.get("placeholder"))

    def _tags_by_ids(self, element_ids: list[str]) -> list[Tag]:
        tags: list[Tag] = []
        for element_id in element_ids:
            tag = self.soup.find(id=element_id)
            if isinstance(tag, Tag):
                tags.append(tag)
        return tags

    def _text_content(self, tag: Tag) -> str:
        pieces: list[str] = []
        for child in tag.children:
            if isinstance(child, Tag):
                if _hides_subtree(child):
                    continue
                if child.name == "img":
                    pieces.append(str(child.get("alt") or ""))
                    continue
                pieces.append(self._text_content(child))
            elif isinstance(child, NavigableString) and not isinstance(child, Comment):
                pieces.append(str(child))
        return normalize_name("".join(pieces))


def _hides_subtree(tag: Tag) -> bool:
    if (tag.name or "").lower() in NEVER_RENDERED_TAGS:
        return True
    if tag.has_attr("hidden"):
        return True
    if str(tag.get("aria-hidden") or "").strip().lower() == "true":
        return True
    if tag.name == "input" and str(tag.get("type") or "").lower() == "hidden":
        return True
    style = str(tag.get("style") or "")
    return bool(_DISPLAY_NONE_PATTERN.search(style) or _VISIBILITY_HIDDEN_PATTERN.search(style))


def _int_or_zero(value: Any) -> int:
    try:
        return int(str(value))
    except (TypeError, ValueError):
        return 0
