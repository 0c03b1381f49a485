"""Errors raised while loading, rewriting, or storing an output file map."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pathlib import Path


class OutputFileMapError(Exception):
    """Base class for all output file map failures."""


class ParseError(OutputFileMapError, ValueError):
    """The document is malformed or does not have the output file map shape."""

    def __init__(self, message: str, path: Path | str | None = None) -> None:
        self.path = str(path) if path is not None else None
        super().__init__(f"{self.path}: {message}" if self.path else message)


class OutputFileMapIOError(OutputFileMapError, OSError):
    """Reading or writing the document failed at the filesystem boundary."""

    def __init__(self, message: str, path: Path | str) -> None:
        self.path = str(path)
        super().__init__(f"{message}: {self.path}")


class PathDerivationConflict(OutputFileMapError):
    """Two distinct original paths derived the same relocated path."""

    def __init__(self, relocated: str, originals: tuple[str, str]) -> None:
        self.relocated = relocated
        self.originals = originals
        super().__init__(
            f"Relocated path {relocated} would be shared by {originals[0]} and {originals[1]}"
        )


class UnsupportedPathError(OutputFileMapError, ValueError):
    """An original path cannot be placed under the incremental storage root."""

    def __init__(self, original: str, reason: str) -> None:
        self.original = original
        super().__init__(f"Cannot relocate {original!r}: {reason}")
