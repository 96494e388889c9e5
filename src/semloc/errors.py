from __future__ import annotations

from typing import TYPE_CHECKING, Any, Sequence

if TYPE_CHECKING:
    from .models import NotFound, SemanticLocator


class SemanticLocatorError(Exception):
    pass


class InvalidLocatorError(SemanticLocatorError, ValueError):
    def __init__(self, message: str, locator: str | None = None, position: int | None = None) -> None:
        super().__init__(message)
        self.locator = locator
        self.position = position


class NoSuchElementError(SemanticLocatorError, LookupError):
    def __init__(
        self,
        message: str,
        *,
        locator: SemanticLocator | None = None,
        result: NotFound | None = None,
        hidden_matches: Sequence[Any] = (),
    ) -> None:
        super().__init__(message)
        self.locator = locator
        self.result = result
        self.hidden_matches = tuple(hidden_matches)


class DocumentOrderError(SemanticLocatorError, RuntimeError):
    """Raised when a tree backend hands back elements out of document order."""
