"""Name canonicalization shared by validation, generation and the accessor runtime."""

from __future__ import annotations

import keyword
import re

_SEPARATORS = re.compile(r"[^A-Za-z0-9]+")


def name_segments(name: str) -> list[str]:
    """Split a raw name on runs of non-alphanumeric characters, dropping empties."""
    return [segment for segment in _SEPARATORS.split(name) if segment]


def to_java_name(name: str) -> str:
    """Upper camel case form of a raw name: ``core-utils`` -> ``CoreUtils``.

    Only the first character of each segment is changed, so ``fooBar`` and
    ``foo-bar`` both become ``FooBar``.
    """
    return "".join(segment[0].upper() + segment[1:] for segment in name_segments(name))


def to_symbol(name: str) -> str:
    """Accessor name for a raw name: ``core-utils`` -> ``coreUtils``."""
    java_name = to_java_name(name)
    if not java_name:
        return ""
    return java_name[0].lower() + java_name[1:]


def capitalize(name: str) -> str:
    """Upper-case the first character only."""
    return name[:1].upper() + name[1:]


def is_reserved(symbol: str) -> bool:
    """True when a symbol cannot be used as a Python attribute name."""
    return keyword.iskeyword(symbol)
