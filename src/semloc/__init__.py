"""Resolve semantic (accessibility) locators against element trees."""

from __future__ import annotations

from .diagnostics import build_failure_message
from .errors import DocumentOrderError, InvalidLocatorError, NoSuchElementError, SemanticLocatorError
from .lookup import find_all, find_first, resolve
from .models import (
    Attribute,
    AttributeNotFound,
    Found,
    NameMatcher,
    NameNotFound,
    NotFound,
    PartialFind,
    Result,
    RoleNotFound,
    SemanticLocator,
    SemanticNode,
)
from .parser import parse
from .resolver import combine_most_specific, find_by_semantic_locator
from .tree import AccessibilityTree

__version__ = "0.1.0"

__all__ = [
    "AccessibilityTree",
    "Attribute",
    "AttributeNotFound",
    "DocumentOrderError",
    "Found",
    "InvalidLocatorError",
    "NameMatcher",
    "NameNotFound",
    "NoSuchElementError",
    "NotFound",
    "PartialFind",
    "Result",
    "RoleNotFound",
    "SemanticLocator",
    "SemanticLocatorError",
    "SemanticNode",
    "build_failure_message",
    "combine_most_specific",
    "find_all",
    "find_by_semantic_locator",
    "find_first",
    "parse",
    "resolve",
]
