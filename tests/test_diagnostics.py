from semloc.diagnostics import build_failure_message, closest_find_text
from semloc.models import Attribute, AttributeNotFound, NotFound, PartialFind, RoleNotFound
from semloc.parser import parse


def test_message_for_role_failure_at_root() -> None:
    locator = parse("{dialog}")
    result = NotFound((), ("body",), RoleNotFound("dialog"))

    message = build_failure_message(locator, result)

    assert message == (
        "Didn't find any elements matching semantic locator {dialog}. "
        "No element with role 'dialog' was found."
    )


def test_message_for_attribute_failure_after_outer() -> None:
    locator = parse("{list} outer {listitem selected:true}")
    result = NotFound(
        locator.pre_outer,
        ("first", "second"),
        AttributeNotFound(Attribute("selected", "true")),
        PartialFind("listitem"),
    )

    message = build_failure_message(locator, result)

    assert message == (
        "Didn't find any elements matching semantic locator {list} outer {listitem selected:true}. "
        "The closest match was {list} outer {listitem}, which matched 2 elements. "
        "None of them had selected:true."
    )


def test_message_for_role_failure_deeper_in_sequence() -> None:
    locator = parse("{form} {button}")
    result = NotFound(locator.pre_outer[:1], ("form",), RoleNotFound("button"))

    message = build_failure_message(locator, result)

    assert "The closest match was {form}, which matched 1 element." in message
    assert message.endswith("No element with role 'button' was found below them.")


def test_message_mentions_hidden_matches() -> None:
    locator = parse("{button 'Save'}")
    result = NotFound((), ("body",), RoleNotFound("button"))

    single = build_failure_message(locator, result, ["hidden-button"])
    several = build_failure_message(locator, result, ["one", "two"])

    assert "1 element matching the locator is hidden from assistive technology" in single
    assert "2 elements matching the locator are hidden from assistive technology" in several
    assert "include_hidden=True" in several


def test_closest_find_places_outer_only_after_pre_outer_matched() -> None:
    locator = parse("{region} {list} outer {listitem} {link}")
    inside_pre = NotFound(locator.pre_outer[:1], (), RoleNotFound("list"))
    at_boundary = NotFound(locator.pre_outer, (), RoleNotFound("listitem"))
    partial_at_boundary = NotFound(
        locator.pre_outer,
        (),
        AttributeNotFound(Attribute("current", "page")),
        PartialFind("listitem", (Attribute("selected", "true"),)),
    )
    inside_post = NotFound(
        locator.pre_outer + locator.post_outer[:1],
        (),
        AttributeNotFound(Attribute("current", "page")),
        PartialFind("link"),
    )

    assert closest_find_text(locator, inside_pre) == "{region}"
    assert closest_find_text(locator, at_boundary) == "{region} {list}"
    assert closest_find_text(locator, partial_at_boundary) == "{region} {list} outer {listitem selected:true}"
    assert closest_find_text(locator, inside_post) == "{region} {list} outer {listitem} {link}"


def test_role_miss_right_after_outer_reads_naturally() -> None:
    locator = parse("{list} outer {listitem}")
    result = NotFound(locator.pre_outer, ("first", "second"), RoleNotFound("listitem"))

    message = build_failure_message(locator, result)

    assert "The closest match was {list}, which matched 2 elements." in message
    assert message.endswith("No element with role 'listitem' was found below them.")
