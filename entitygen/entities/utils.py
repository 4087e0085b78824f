"""Naming and comment helpers for entity creation."""
import re
from typing import List, Optional

# Acronym runs, capitalized words, lowercase runs and digit runs
_WORD_RE = re.compile(r"[A-Z]+(?=[A-Z][a-z])|[A-Z]?[a-z]+|[A-Z]+|[0-9]+")


def split_words(name: str) -> List[str]:
    """Split an identifier or phrase into words (``BookAuthor`` -> ``Book``, ``Author``)."""
    return _WORD_RE.findall(name or "")


def camel_case(name: str) -> str:
    """Convert any identifier or phrase to camelCase."""
    words = split_words(name)
    if not words:
        return ""
    return words[0].lower() + "".join(capitalize(word) for word in words[1:])


def snake_case(name: str) -> str:
    """Convert PascalCase, camelCase or spaced names to snake_case."""
    return "_".join(word.lower() for word in split_words(name))


def lower_first(name: str) -> str:
    if not name:
        return name
    return name[0].lower() + name[1:]


def capitalize(name: str) -> str:
    """Upper-case the first character and lower-case the rest (``maxBytes`` -> ``Maxbytes``)."""
    if not name:
        return name
    return name[0].upper() + name[1:].lower()


def format_comment(comment: Optional[str]) -> Optional[str]:
    """
    Flatten a doc comment into one line for the entity file.

    Comment markers and leading ``*`` gutters are dropped, blank lines are
    skipped and the remaining lines are joined with a literal ``\\n``.
    """
    if not comment:
        return None
    lines = []
    for line in comment.strip().splitlines():
        line = line.strip()
        if line.startswith("/**"):
            line = line[3:]
        elif line.startswith("/*"):
            line = line[2:]
        if line.endswith("*/"):
            line = line[:-2]
        line = re.sub(r"^\*+\s?", "", line.strip()).strip()
        if line:
            lines.append(line)
    if not lines:
        return None
    return "\\n".join(lines)
