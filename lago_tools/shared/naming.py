"""Naming utilities for code generation."""

from __future__ import annotations

import re
from functools import lru_cache

TS_RESERVED: frozenset[str] = frozenset({
    "break",
    "case",
    "catch",
    "class",
    "const",
    "continue",
    "debugger",
    "default",
    "delete",
    "do",
    "else",
    "enum",
    "export",
    "extends",
    "false",
    "finally",
    "for",
    "function",
    "if",
    "import",
    "in",
    "instanceof",
    "new",
    "null",
    "return",
    "super",
    "switch",
    "this",
    "throw",
    "true",
    "try",
    "typeof",
    "var",
    "void",
    "while",
    "with",
})

# Common irregular plurals
_IRREGULAR_PLURALS: dict[str, str] = {
    "children": "child",
    "people": "person",
    "men": "man",
    "women": "woman",
    "mice": "mouse",
    "geese": "goose",
    "teeth": "tooth",
    "feet": "foot",
    "criteria": "criterion",
    "analyses": "analysis",
    "indices": "index",
    "matrices": "matrix",
}

_IDENTIFIER_RE = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")

# Start of a word inside a camelCase or separated name
_WORD_START_RE = re.compile(r"(?<=[a-z0-9])(?=[A-Z])|(?<=[^A-Za-z0-9])")

# Singular words that merely look plural (status, analysis)
_SINGULAR_ENDINGS: tuple[str, ...] = ("us", "is")


def _split_trailing_word(name: str) -> tuple[str, str]:
    starts = [m.start() for m in _WORD_START_RE.finditer(name)]
    cut = starts[-1] if starts else 0
    return name[:cut], name[cut:]


@lru_cache(maxsize=1024)
def singularize(name: str) -> str:
    """Convert a plural word to singular form.

    Only the trailing word of a camelCase name is affected, so
    ``productLikes`` becomes ``productLike`` and ``orderStatus`` stays as is.
    """
    head, tail = _split_trailing_word(name)
    if not tail:
        return name

    # Irregular plurals must match the whole trailing word
    singular = _IRREGULAR_PLURALS.get(tail.lower())
    if singular is not None:
        if tail[0].isupper():
            singular = singular.capitalize()
        return head + singular

    if tail.lower().endswith(_SINGULAR_ENDINGS):
        return name
    if name.endswith("ies") and len(tail) > 3:
        return name[:-3] + "y"
    if name.endswith(("ses", "xes", "zes")) and len(tail) > 3:
        return name[:-2]
    if name.endswith(("ches", "shes")) and len(tail) > 4:
        return name[:-2]
    if name.endswith("s") and not name.endswith("ss") and len(tail) > 1:
        return name[:-1]
    return name


def is_plural(name: str) -> bool:
    """Return True if ``name`` ends in a pluralizing suffix."""
    return singularize(name) != name


@lru_cache(maxsize=1024)
def to_pascal_case(value: str) -> str:
    """Convert a string to PascalCase.

    Examples:
        >>> to_pascal_case("hello_world")
        'HelloWorld'
        >>> to_pascal_case("flea-market")
        'FleaMarket'
        >>> to_pascal_case("helloWorld")
        'HelloWorld'
    """
    parts = [part for part in re.split(r"[^A-Za-z0-9]+", value) if part]
    return "".join(part[0].upper() + part[1:] for part in parts)


@lru_cache(maxsize=1024)
def to_camel_case(value: str) -> str:
    """Convert a string to camelCase, keeping inner capitals.

    Examples:
        >>> to_camel_case("flea-market")
        'fleaMarket'
        >>> to_camel_case("ProductLike")
        'productLike'
    """
    pascal = to_pascal_case(value)
    if not pascal:
        return pascal
    return pascal[0].lower() + pascal[1:]


@lru_cache(maxsize=1024)
def to_words(value: str) -> str:
    """Split a camelCase identifier into lower-case words."""
    spaced = re.sub(r"([a-z0-9])([A-Z])", r"\1 \2", value)
    return " ".join(part.lower() for part in re.split(r"[^A-Za-z0-9]+", spaced) if part)


@lru_cache(maxsize=1024)
def to_constant_case(value: str) -> str:
    """Convert an enum literal into an UPPER_SNAKE member name."""
    spaced = re.sub(r"([a-z0-9])([A-Z])", r"\1_\2", value)
    cleaned = re.sub(r"[^A-Za-z0-9]+", "_", spaced).strip("_").upper()
    if not cleaned or cleaned[0].isdigit():
        return f"VALUE_{cleaned}" if cleaned else "VALUE"
    return cleaned


def sanitize_field_name(value: str) -> str:
    """Quote a property name that is not a plain TypeScript identifier."""
    if _IDENTIFIER_RE.match(value):
        return value
    escaped = value.replace("\\", "\\\\").replace("'", "\\'")
    return f"'{escaped}'"


def property_access(target: str, name: str) -> str:
    """Render ``target.name``, falling back to bracket access.

    A ``target`` ending in ``?`` renders optional chaining.
    """
    if _IDENTIFIER_RE.match(name) and name not in TS_RESERVED:
        return f"{target}.{name}"
    chain = "." if target.endswith("?") else ""
    return f"{target}{chain}[{sanitize_field_name(name)}]"
