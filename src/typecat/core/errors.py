"""Typecat error types and utilities."""

from __future__ import annotations

import os
import tempfile
from pathlib import Path


def atomic_write(path: Path, content: str) -> None:
    """Write content to a file atomically using temp file + rename.

    Writes to a temporary file in the same directory, fsyncs it,
    then atomically replaces the target path.
    """
    fd, tmp = tempfile.mkstemp(dir=path.parent, suffix=".tmp")
    closed = False
    try:
        os.write(fd, content.encode())
        os.fsync(fd)
        os.close(fd)
        closed = True
        os.replace(tmp, str(path))
    except BaseException:
        if not closed:
            os.close(fd)
        try:
            os.unlink(tmp)
        except OSError:
            pass
        raise


def format_tree(header: str, items: list[str]) -> str:
    """Render a header with one indented bullet per item."""
    lines = [header]
    lines.extend(f"  - {item}" for item in items)
    return "\n".join(lines)


class TypecatError(Exception):
    """Base exception for Typecat."""

    pass


class ModelError(TypecatError, ValueError):
    """A catalog model or project tree breaks one of its invariants."""

    pass


class AccessorValidationError(TypecatError):
    """Project names cannot be turned into accessors.

    Carries every violation found, in discovery order.
    """

    def __init__(self, errors: list[str]):
        self.errors = list(errors)
        super().__init__(
            format_tree(
                "Cannot generate project dependency accessors:",
                [f"Cannot generate project dependency accessors because {e}" for e in self.errors],
            )
        )


class GenerationError(TypecatError):
    """Source generation was invoked on input it cannot handle (internal error)."""

    pass


class CompilationError(TypecatError):
    """The compiler rejected generated sources.

    ``sources`` maps each generated module's relative path to its text.
    """

    def __init__(self, message: str, sources: dict[str, str] | None = None):
        self.sources = dict(sources or {})
        super().__init__(message)

    def describe(self) -> str:
        """Error message followed by the generated sources, for diagnosis."""
        parts = [str(self)]
        for name in sorted(self.sources):
            parts.append(f"--- {name} ---\n{self.sources[name]}")
        return "\n".join(parts)


class AccessorError(TypecatError):
    """A generated accessor could not reach a class it refers to."""

    pass
