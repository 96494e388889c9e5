from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from playwright.sync_api import ElementHandle, Page

CANONICALIZE_SCRIPT = """
(base, [known, found]) => found.map((element) => known.indexOf(element))
"""

ATTRIBUTE_VALUE_SCRIPT = """
(el, name) => {
  const explicit = el.getAttribute('aria-' + name);
  if (explicit !== null) return explicit.trim().toLowerCase();

  const tag = el.tagName.toLowerCase();
  const role = (el.getAttribute('role') || '').trim().toLowerCase();
  const inputType = (el.getAttribute('type') || 'text').toLowerCase();
  const checkable = ['checkbox', 'radio', 'switch', 'menuitemcheckbox', 'menuitemradio'];
  if (name === 'checked') {
    if (tag === 'input' && ['checkbox', 'radio'].includes(inputType)) return el.checked ? 'true' : 'false';
    if (checkable.includes(role)) return 'false';
    return null;
  }
  if (name === 'disabled') return el.matches(':disabled') ? 'true' : 'false';
  if (name === 'selected') {
    if (tag === 'option') return el.selected ? 'true' : 'false';
    if (['option', 'tab', 'gridcell', 'row', 'treeitem'].includes(role)) return 'false';
    return null;
  }
  if (name === 'readonly') {
    if (['input', 'textarea'].includes(tag)) return el.readOnly ? 'true' : 'false';
    return null;
  }
  if (name === 'level') {
    const match = /^h([1-6])$/.exec(tag);
    if (match) return match[1];
    if (role === 'heading') return '2';
    return null;
  }
  if (name === 'expanded' && tag === 'details') return el.open ? 'true' : 'false';
  return null;
}
"""

ACCESSIBLE_NAME_SCRIPT = """
(el) => {
  const normalize = (value) => (value || '').replace(/\\s+/g, ' ').trim();
  const text = (node) => normalize(node.innerText || node.textContent || '');

  const labelledBy = (el.getAttribute('aria-labelledby') || '').trim();
  if (labelledBy) {
    const name = normalize(
      labelledBy.split(/\\s+/)
        .map((id) => document.getElementById(id))
        .filter(Boolean)
        .map(text)
        .join(' ')
    );
    if (name) return name;
  }

  const ariaLabel = normalize(el.getAttribute('aria-label'));
  if (ariaLabel) return ariaLabel;

  const tag = el.tagName.toLowerCase();
  if (['input', 'select', 'textarea'].includes(tag)) {
    const labels = el.labels ? Array.from(el.labels).map(text).filter(Boolean) : [];
    if (labels.length) return normalize(labels.join(' '));
    const inputType = (el.getAttribute('type') || 'text').toLowerCase();
    if (['submit', 'reset', 'button'].includes(inputType)) {
      const value = normalize(el.value);
      if (value) return value;
      if (inputType === 'submit') return 'Submit';
      if (inputType === 'reset') return 'Reset';
    }
    const placeholder = normalize(el.getAttribute('placeholder'));
    if (placeholder) return placeholder;
  }

  if (['img', 'area'].includes(tag) || (tag === 'input' && el.getAttribute('type') === 'image')) {
    const alt = normalize(el.getAttribute('alt'));
    if (alt) return alt;
  }

  const role = (el.getAttribute('role') || '').trim().toLowerCase();
  const contentTags = ['button', 'a', 'h1', 'h2', 'h3', 'h4', 'h5', 'h6', 'td', 'th', 'option', 'summary', 'tr'];
  const contentRoles = [
    'button', 'cell', 'checkbox', 'columnheader', 'gridcell', 'heading', 'link', 'menuitem',
    'menuitemcheckbox', 'menuitemradio', 'option', 'radio', 'row', 'rowheader', 'switch', 'tab',
    'tooltip', 'treeitem',
  ];
  if (contentRoles.includes(role) || (!role && contentTags.includes(tag))) {
    const content = text(el);
    if (content) return content;
  }

  return normalize(el.getAttribute('title'));
}
"""

COMPARE_ORDER_SCRIPT = """
(first, second) => {
  if (first === second) return 0;
  const position = first.compareDocumentPosition(second);
  return (position & Node.DOCUMENT_POSITION_FOLLOWING) ? -1 : 1;
}
"""

CONTAINS_SCRIPT = """
(ancestor, node) => ancestor !== node && ancestor.contains(node)
"""

DESCRIBE_SCRIPT = """
(el) => ({
  tag: el.tagName.toLowerCase(),
  id: el.id || null,
  role: el.getAttribute('role') || null,
  text: (el.innerText || el.textContent || '').trim().replace(/\\s+/g, ' ').slice(0, 200) || null,
})
"""


class PlaywrightTree:
    """Accessibility tree over live Playwright element handles.

    Roles and visibility come from Playwright's ``role=`` selector engine.
    Playwright hands out a fresh ``ElementHandle`` per query, so every handle
    returned here is mapped back to the first handle seen for the same DOM
    element. That keeps identity comparisons valid across bases.
    """

    def __init__(self, root: ElementHandle) -> None:
        self._known: list[ElementHandle] = [root]

    @classmethod
    def for_page(cls, page: Page, selector: str = "body") -> PlaywrightTree:
        root = page.query_selector(selector)
        if root is None:
            raise LookupError(f"No element matches '{selector}'.")
        return cls(root)

    @property
    def root(self) -> ElementHandle:
        return self._known[0]

    def dispose(self) -> None:
        """Release every handle this tree obtained; the caller keeps the root."""
        handles = self._known[1:]
        del self._known[1:]
        for handle in handles:
            handle.dispose()

    def __enter__(self) -> PlaywrightTree:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.dispose()

    def find_by_role(self, role: str, base: ElementHandle, include_hidden: bool) -> list[ElementHandle]:
        selector = f"role={role}"
        if include_hidden:
            selector += "[include-hidden=true]"
        return self._canonicalize(base, base.query_selector_all(selector))

    def attribute_value(self, node: ElementHandle, name: str) -> str | None:
        value = node.evaluate(ATTRIBUTE_VALUE_SCRIPT, name)
        return None if value is None else str(value)

    def accessible_name(self, node: ElementHandle) -> str:
        return str(node.evaluate(ACCESSIBLE_NAME_SCRIPT) or "")

    def compare_order(self, first: ElementHandle, second: ElementHandle) -> int:
        if first is second:
            return 0
        return int(first.evaluate(COMPARE_ORDER_SCRIPT, second))

    def contains(self, ancestor: ElementHandle, node: ElementHandle) -> bool:
        if ancestor is node:
            return False
        return bool(ancestor.evaluate(CONTAINS_SCRIPT, node))

    def describe(self, node: ElementHandle) -> dict[str, Any]:
        return dict(node.evaluate(DESCRIBE_SCRIPT))

    def _canonicalize(self, base: ElementHandle, found: list[ElementHandle]) -> list[ElementHandle]:
        if not found:
            return []
        indices = base.evaluate(CANONICALIZE_SCRIPT, [self._known, found])
        canonical: list[ElementHandle] = []
        for handle, index in zip(found, indices):
            if index is None or int(index) < 0:
                self._known.append(handle)
                canonical.append(handle)
            else:
                handle.dispose()
                canonical.append(self._known[int(index)])
        return canonical
