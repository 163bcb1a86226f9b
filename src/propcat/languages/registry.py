"""Language detection and tree provider registry."""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import TYPE_CHECKING

from propcat.exit_codes import SourceNotFoundError, UnsupportedLanguageError

if TYPE_CHECKING:
    from .base import DeclarationNode, TreeProvider

_EXTENSION_MAP: dict[str, str] = {
    ".cs": "c_sharp",
}

_LANG_ALIASES = {
    "c#": "c_sharp",
    "cs": "c_sharp",
    "csharp": "c_sharp",
    "c_sharp": "c_sharp",
}


def normalize_language_name(language: str | None) -> str | None:
    """Normalize user-facing language aliases to provider language names."""
    if language is None:
        return None
    key = language.strip().lower()
    if not key:
        return None
    return _LANG_ALIASES.get(key, key)


def get_language_for_file(path: str) -> str | None:
    """Determine the language for a file based on its extension.

    Returns the language name string, or None if unsupported.
    """
    _, ext = os.path.splitext(path)
    return _EXTENSION_MAP.get(ext.lower())


@lru_cache(maxsize=None)
def get_provider(language: str) -> "TreeProvider":
    """Create and cache a tree provider for *language*.

    Raises ValueError for languages without a provider.
    """
    language = normalize_language_name(language) or ""
    if language == "c_sharp":
        from .csharp_lang import CSharpTreeProvider

        return CSharpTreeProvider()
    raise ValueError(f"Unsupported language: {language}")


def get_provider_for_file(path: str) -> "TreeProvider":
    language = get_language_for_file(path)
    if language is None:
        raise UnsupportedLanguageError(path)
    return get_provider(language)


def read_source(path: Path) -> bytes | None:
    """Read file bytes, or None if the file is missing or unreadable."""
    try:
        return path.read_bytes()
    except OSError:
        return None


def parse_file(path: str | Path, language: str | None = None) -> "DeclarationNode":
    """Parse *path* into a declaration tree.

    *language* overrides extension based detection.
    """
    path = Path(path)
    if language is not None:
        try:
            provider = get_provider(language)
        except ValueError:
            raise UnsupportedLanguageError(str(path)) from None
    else:
        provider = get_provider_for_file(str(path))
    source = read_source(path)
    if source is None:
        raise SourceNotFoundError(str(path))
    return provider.parse(source, str(path))
