from semloc.matcher import find_by_semantic_nodes
from semloc.models import (
    Attribute,
    AttributeNotFound,
    Found,
    NameMatcher,
    NameNotFound,
    NotFound,
    PartialFind,
    RoleNotFound,
    SemanticNode,
)
from semloc.parser import parse
from semloc.resolver import combine_most_specific, find_by_semantic_locator
from semloc.soup_tree import SoupTree

NESTED_LISTS = """
<div role="list" id="a">
  <div role="list" id="b">
    <div role="listitem" id="c">Inner</div>
  </div>
  <div role="listitem" id="d">Outer</div>
</div>
"""


def _ids(elements: tuple) -> list[str]:
    return [element.get("id") for element in elements]


def test_outer_results_are_sorted_and_deduplicated_for_nested_bases() -> None:
    tree = SoupTree(NESTED_LISTS)

    result = find_by_semantic_locator(parse("{list} outer {listitem}"), tree.root, tree)

    assert isinstance(result, Found)
    assert _ids(result.elements) == ["c", "d"]


def test_outer_matches_each_nested_list_on_its_own() -> None:
    tree = SoupTree(
        """
        <ul id="menu">
          <li id="file">File
            <ul><li id="open">Open</li><li id="save">Save</li></ul>
          </li>
          <li id="edit">Edit</li>
        </ul>
        """
    )

    outer = find_by_semantic_locator(parse("{list} outer {listitem}"), tree.root, tree)
    plain = find_by_semantic_locator(parse("{list} {listitem}"), tree.root, tree)

    assert isinstance(outer, Found)
    assert _ids(outer.elements) == ["file", "open", "save", "edit"]
    assert isinstance(plain, Found)
    assert _ids(plain.elements) == ["file", "open", "save", "edit"]


def test_outer_relative_to_region_returns_top_level_items_only() -> None:
    tree = SoupTree(
        """
        <section aria-label="Menu">
          <ul>
            <li id="file">File <ul><li id="open">Open</li></ul></li>
            <li id="edit">Edit</li>
          </ul>
        </section>
        """
    )

    result = find_by_semantic_locator(parse("{region 'Menu'} outer {listitem}"), tree.root, tree)

    assert isinstance(result, Found)
    assert _ids(result.elements) == ["file", "edit"]


def test_locator_without_outer_equals_sequence_match() -> None:
    tree = SoupTree(NESTED_LISTS)
    locator = parse("{list} {listitem}")

    direct = find_by_semantic_nodes(locator.pre_outer, [tree.root], tree)
    resolved = find_by_semantic_locator(locator, tree.root, tree)

    assert resolved == direct


def test_pre_outer_failure_is_returned_unchanged() -> None:
    tree = SoupTree(NESTED_LISTS)
    locator = parse("{navigation} outer {listitem}")

    result = find_by_semantic_locator(locator, tree.root, tree)

    assert isinstance(result, NotFound)
    assert result.closest_find == ()
    assert result.not_found == RoleNotFound("navigation")
    assert result.elements_found == (tree.root,)


def test_outer_failure_merges_most_specific_and_prepends_pre_outer() -> None:
    tree = SoupTree(
        """
        <div role="list" id="empty"><span>Nothing here</span></div>
        <div role="list" id="options">
          <input type="checkbox" checked aria-label="Decline">
        </div>
        """
    )
    locator = parse("{list} outer {checkbox 'Accept' checked:true disabled:false}")

    result = find_by_semantic_locator(locator, tree.root, tree)

    assert isinstance(result, NotFound)
    assert result.closest_find == locator.pre_outer
    assert result.not_found == NameNotFound(NameMatcher("Accept"))
    assert result.partial_find == PartialFind(
        "checkbox", (Attribute("checked", "true"), Attribute("disabled", "false"))
    )
    assert [element.get("aria-label") for element in result.elements_found] == ["Decline"]


def test_combine_most_specific_prefers_longest_closest_find() -> None:
    shallow = NotFound((), ("root",), RoleNotFound("list"))
    deep = NotFound((SemanticNode("list"),), ("list",), RoleNotFound("listitem"))

    assert combine_most_specific([shallow, deep]) is deep


def test_combine_most_specific_prefers_longest_partial_find_on_tie() -> None:
    role_stage = NotFound((), ("base-1",), RoleNotFound("checkbox"))
    two_attributes = NotFound(
        (),
        ("base-2",),
        AttributeNotFound(Attribute("expanded", "true")),
        PartialFind("checkbox", (Attribute("checked", "true"), Attribute("disabled", "false"))),
    )
    one_attribute = NotFound(
        (),
        ("base-3",),
        AttributeNotFound(Attribute("disabled", "false")),
        PartialFind("checkbox", (Attribute("checked", "true"),)),
    )

    assert combine_most_specific([role_stage, two_attributes, one_attribute]) is two_attributes


def test_combine_most_specific_keeps_first_on_full_tie() -> None:
    first = NotFound((), ("base-1",), RoleNotFound("button"))
    second = NotFound((), ("base-2",), RoleNotFound("button"))

    assert combine_most_specific([first, second]) is first


def test_name_stage_without_attributes_beats_role_stage() -> None:
    role_stage = NotFound((), ("base-1",), RoleNotFound("button"))
    name_stage = NotFound((), ("base-2",), NameNotFound(NameMatcher("OK")), PartialFind("button"))

    assert combine_most_specific([role_stage, name_stage]) is name_stage


def test_repeated_resolution_is_identical() -> None:
    tree = SoupTree(NESTED_LISTS)
    locator = parse("{list} outer {listitem}")

    first = find_by_semantic_locator(locator, tree.root, tree)
    second = find_by_semantic_locator(locator, tree.root, tree)

    assert isinstance(first, Found)
    assert isinstance(second, Found)
    assert [id(element) for element in first.elements] == [id(element) for element in second.elements]


def test_results_are_strictly_increasing_in_document_order() -> None:
    tree = SoupTree(NESTED_LISTS)

    result = find_by_semantic_locator(parse("{list} outer {listitem}"), tree.root, tree)

    assert isinstance(result, Found)
    pairs = zip(result.elements, result.elements[1:])
    assert all(tree.compare_order(first, second) < 0 for first, second in pairs)
