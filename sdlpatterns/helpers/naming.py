"""Name heuristics shared by the pattern matchers."""

from __future__ import annotations

import re

_WORD_RE = re.compile(r"[A-Z]+(?![a-z])|[A-Z]?[a-z]+|[0-9]+")

# Suffixes that name an alternative representation of the same value,
# e.g. ``createdAt`` / ``createdAtIso`` / ``createdAtUnix``.
REPRESENTATION_SUFFIXES = (
    "Formatted",
    "Format",
    "String",
    "Str",
    "Text",
    "Iso",
    "ISO",
    "Iso8601",
    "Utc",
    "UTC",
    "Unix",
    "Timestamp",
    "Epoch",
    "Millis",
    "Ms",
    "Seconds",
    "InSeconds",
    "InMs",
    "Raw",
    "Display",
    "Pretty",
    "Html",
    "HTML",
    "Markdown",
    "Plain",
    "Label",
    "Localized",
    "Cents",
)


def split_words(name: str) -> list[str]:
    """Split camelCase, PascalCase or snake_case into lowercase words.

    ``"dateOfBirth"`` -> ``["date", "of", "birth"]``,
    ``"TV_SHOW"`` -> ``["tv", "show"]``.
    """
    words: list[str] = []
    for chunk in re.split(r"[^A-Za-z0-9]+", name):
        words.extend(w.lower() for w in _WORD_RE.findall(chunk))
    return words


def split_representation(name: str) -> tuple[str, str]:
    """Split a field name into (stem, representation suffix).

    The longest matching suffix wins; the stem must stay non-empty and the
    suffix must start a new camel-case word. Returns ``(name, "")`` when no
    suffix applies.
    """
    best = ""
    for suffix in REPRESENTATION_SUFFIXES:
        if len(suffix) >= len(name) or len(suffix) <= len(best):
            continue
        if name.endswith(suffix) and name[-len(suffix)].isupper():
            best = suffix
    if best:
        return name[: -len(best)], best
    return name, ""


def mentions(text: str, phrase: str) -> bool:
    """True if ``text`` mentions ``phrase`` as whole words, ignoring case.

    ``phrase`` may be an identifier (``TV_SHOW``, ``tvShow``); it is compared
    word by word so ``"only for TV shows"`` mentions ``TV_SHOW``.
    """
    wanted = split_words(phrase)
    if not wanted:
        return False
    words = split_words(text)
    size = len(wanted)
    for i in range(len(words) - size + 1):
        window = words[i : i + size]
        if window[:-1] == wanted[:-1] and _same_word(window[-1], wanted[-1]):
            return True
    return False


def _same_word(seen: str, wanted: str) -> bool:
    """Compare words, tolerating a plural ``s``/``es`` on either side."""
    if seen == wanted:
        return True
    for plural in ("s", "es"):
        if seen == wanted + plural or wanted == seen + plural:
            return True
    return False
