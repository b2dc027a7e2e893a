"""Word list loading: one word per line, trimmed and uppercased."""

import logging
from pathlib import Path
from typing import FrozenSet, Iterable


log = logging.getLogger("wordsland")


def parse_words(lines: Iterable[str]) -> FrozenSet[str]:
    """Trim and uppercase each line, skipping blanks."""
    return frozenset(
        line.strip().upper()
        for line in lines
        if line.strip()
    )


def load_dictionary(path: str | Path) -> FrozenSet[str]:
    """
    Load a word list from a text file.

    Raises:
        FileNotFoundError: If the file does not exist
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Dictionary not found at {path}")

    with open(path, "r", encoding="utf-8") as f:
        words = parse_words(f)

    log.info("Loaded %s words from %s", f"{len(words):,}", path)
    return words
