"""Type tags carried by every expression node.

The parser only ever assigns ``UNKNOWN`` or a primitive literal type;
everything else is for a later checking pass to fill in.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class PrimitiveType:
    name: str


@dataclass(frozen=True)
class ListType:
    element: Typ


@dataclass(frozen=True)
class FuncType:
    param: Typ
    result: Typ


Typ = PrimitiveType | ListType | FuncType

UNKNOWN = PrimitiveType("Unknown")
INT = PrimitiveType("Int")
FLOAT = PrimitiveType("Float")
BOOL = PrimitiveType("Bool")
STRING = PrimitiveType("String")


def type_name(t: Typ) -> str:
    """Human-readable name for a type."""
    if isinstance(t, PrimitiveType):
        return t.name
    if isinstance(t, ListType):
        return f"[{type_name(t.element)}]"
    if isinstance(t, FuncType):
        param = type_name(t.param)
        if isinstance(t.param, FuncType):
            param = f"({param})"
        return f"{param} -> {type_name(t.result)}"
    return "?"
