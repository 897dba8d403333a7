"""Text helpers shared by the C++ generators."""

from __future__ import annotations

import re
from typing import Iterator, List

TEMPLATE_INDENT = 4
BYTES_PER_LINE = 16

_IDENTIFIER_INVALID = re.compile(r"[^A-Za-z0-9_]")
_UNDERSCORE_RUN = re.compile(r"_{2,}")
_LEADING_SPACES = re.compile(r"^( *)", re.MULTILINE)

# C++17 keywords and alternative tokens, plus the C++20 additions so a header
# stays valid when built with a newer standard.
CPP_KEYWORDS = frozenset(
    {
        "alignas", "alignof", "and", "and_eq", "asm", "auto", "bitand", "bitor",
        "bool", "break", "case", "catch", "char", "char8_t", "char16_t",
        "char32_t", "class", "compl", "concept", "const", "consteval",
        "constexpr", "constinit", "const_cast", "continue", "co_await",
        "co_return", "co_yield", "decltype", "default", "delete", "do", "double",
        "dynamic_cast", "else", "enum", "explicit", "export", "extern", "false",
        "float", "for", "friend", "goto", "if", "inline", "int", "long",
        "mutable", "namespace", "new", "noexcept", "not", "not_eq", "nullptr",
        "operator", "or", "or_eq", "private", "protected", "public", "register",
        "reinterpret_cast", "requires", "return", "short", "signed", "sizeof",
        "static", "static_assert", "static_cast", "struct", "switch", "template",
        "this", "thread_local", "throw", "true", "try", "typedef", "typeid",
        "typename", "union", "unsigned", "using", "virtual", "void", "volatile",
        "wchar_t", "while", "xor", "xor_eq",
    }
)


def sanitize_identifier(identity: str) -> str:
    """Map an arbitrary identity token onto a C++ identifier fragment.

    Runs of underscores collapse to one, since ``__`` anywhere in a name is
    reserved to the implementation.
    """
    cleaned = _IDENTIFIER_INVALID.sub("_", identity.strip())
    cleaned = _UNDERSCORE_RUN.sub("_", cleaned)
    if not cleaned.strip("_"):
        return "resources"
    if cleaned[0].isdigit():
        cleaned = "_" + cleaned
    return cleaned


def guard_name(identity: str, prefix: str) -> str:
    return _UNDERSCORE_RUN.sub("_", prefix + sanitize_identifier(identity).upper())


def namespace_name(identity: str) -> str:
    """Lower-cased namespace fragment, suffixed with ``_`` when it is a keyword."""
    name = sanitize_identifier(identity).lower()
    if name in CPP_KEYWORDS:
        name += "_"
    return name


def array_name(position: int) -> str:
    """Synthetic array identifier for the resource at ``position``."""
    return f"R{position}"


def byte_literal(value: int) -> str:
    """Return a character literal holding exactly one byte.

    Every literal is closed by its own quote, so a following byte can never
    extend the hexadecimal escape.
    """
    return f"'\\x{value & 0xFF:02x}'"


def byte_lines(data: bytes, per_line: int = BYTES_PER_LINE) -> Iterator[str]:
    """Yield comma separated byte literals, ``per_line`` at a time."""
    for start in range(0, len(data), per_line):
        yield ", ".join(byte_literal(value) for value in data[start : start + per_line])


def string_literal(text: str) -> str:
    """Quote ``text`` as a narrow C++ string literal holding its UTF-8 bytes."""
    parts: List[str] = ['"']
    for value in text.encode("utf-8"):
        if value == 0x5C:
            parts.append("\\\\")
        elif value == 0x22:
            parts.append('\\"')
        elif value == 0x3F:
            # "??" could still form a trigraph on older compilers.
            parts.append("\\?")
        elif 0x20 <= value < 0x7F:
            parts.append(chr(value))
        else:
            # Octal escapes stop after three digits, unlike \x.
            parts.append(f"\\{value:03o}")
    parts.append('"')
    return "".join(parts)


def reindent(text: str, tabulation_size: int, unit: int = TEMPLATE_INDENT) -> str:
    """Rewrite leading indentation from ``unit`` spaces to ``tabulation_size`` spaces per level."""
    if tabulation_size == unit:
        return text
    tabulation = " " * tabulation_size

    def _replace(match: re.Match[str]) -> str:
        levels, remainder = divmod(len(match.group(1)), unit)
        return tabulation * levels + " " * remainder

    return _LEADING_SPACES.sub(_replace, text)


__all__ = [
    "BYTES_PER_LINE",
    "CPP_KEYWORDS",
    "array_name",
    "byte_lines",
    "byte_literal",
    "guard_name",
    "namespace_name",
    "reindent",
    "sanitize_identifier",
    "string_literal",
]
