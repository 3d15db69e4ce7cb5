"""Compile spreadsheet rows into nested translation trees.

The first row is the header: the key column followed by one column per
language. Every following row holds a dot-delimited key (``menu.file.open``)
and one translation per language. Each key is expanded into nested
dictionaries, one tree per language.
"""

from __future__ import annotations

from typing import Any

from loguru import logger

from gsi18n.exceptions import EmptyDataError

TranslationTree = dict[str, Any]

KEY_SEPARATOR = "."


def set_path(tree: TranslationTree, key: str, value: str) -> None:
    """Set ``value`` at the dot-delimited ``key`` inside ``tree``.

    Missing levels are created. A leaf found where a level is needed is
    replaced by a new dictionary, and the final segment always overwrites
    whatever it held before (string or whole subtree).
    """
    segments = key.split(KEY_SEPARATOR)
    node = tree
    for segment in segments[:-1]:
        child = node.get(segment)
        if not isinstance(child, dict):
            child = {}
            node[segment] = child
        node = child
    node[segments[-1]] = value


def header_languages(
    header: list[str], lang_index: int, lowercase: bool = False
) -> list[str]:
    """Return the language identifiers of the header, in column order."""
    languages = [str(cell) for cell in header[lang_index:]]
    if lowercase:
        languages = [lang.lower() for lang in languages]
    return languages


def compile_rows(
    rows: list[list[str]],
    key_index: int = 0,
    lang_index: int = 1,
    *,
    lowercase_languages: bool = False,
    skip_question_keys: bool = False,
) -> dict[str, TranslationTree]:
    """Build one translation tree per language from spreadsheet rows.

    Args:
        rows: Cell values, header first
        key_index: Column holding the translation key
        lang_index: First language column
        lowercase_languages: Lower-case header language identifiers
            (``en-US`` and ``EN-us`` both become ``en-us``)
        skip_question_keys: Ignore rows whose key contains ``?``

    Returns:
        Mapping of language to tree, in header column order

    Raises:
        EmptyDataError: If ``rows`` is empty
    """
    if not rows:
        raise EmptyDataError()

    header = rows[0]
    languages = header_languages(header, lang_index, lowercase_languages)

    trees: dict[str, TranslationTree] = {lang: {} for lang in languages}

    for row_number, row in enumerate(rows[1:], start=1):
        key = str(row[key_index]) if key_index < len(row) else ""

        if skip_question_keys and "?" in key:
            logger.debug(f"Skipping question key {key!r} (row {row_number})")
            continue

        # Short rows stop early; cells past the header have no language
        last_column = min(len(row), len(header))
        for column in range(lang_index, last_column):
            lang = languages[column - lang_index]
            set_path(trees[lang], key, str(row[column]))

    logger.debug(f"Compiled {len(rows) - 1} rows into {len(trees)} languages")
    return trees
