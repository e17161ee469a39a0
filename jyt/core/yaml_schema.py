"""YAML 1.2 core schema: which plain scalars are null, bool, int, or float.

WHY: PyYAML resolves plain scalars with YAML 1.1 rules, where ``on``,
``yes`` and ``NO`` are booleans, ``1:30`` is a base-60 integer and ``017``
is octal. Converting with those rules silently changes data: the ``on:``
key of a CI workflow file becomes ``true``. The 1.2 core schema keeps such
scalars as the strings they look like.

HOW: CoreResolver is a PyYAML BaseResolver that carries only the core
schema's implicit resolvers. The YAML cursor calls ``resolve_scalar()`` and
``construct_scalar()`` to type plain scalars; the YAML sink calls
``resolve_scalar()`` to decide when a string needs quotes. Reader and
writer therefore always agree.

RULES:
- null: ``~``, ``null``, ``Null``, ``NULL``, or the empty scalar
- bool: ``true``/``True``/``TRUE``, ``false``/``False``/``FALSE``
- int: optionally signed decimal, ``0o`` octal, ``0x`` hexadecimal
- float: decimal with fraction and/or exponent, ``.inf``, ``.nan``
- Every other plain scalar is a string
"""

from __future__ import annotations

import math
import re
from typing import Any, Tuple

from yaml.nodes import ScalarNode
from yaml.resolver import BaseResolver

NULL_TAG = "tag:yaml.org,2002:null"
BOOL_TAG = "tag:yaml.org,2002:bool"
INT_TAG = "tag:yaml.org,2002:int"
FLOAT_TAG = "tag:yaml.org,2002:float"
STR_TAG = "tag:yaml.org,2002:str"


class CoreResolver(BaseResolver):
    """Implicit resolvers of the YAML 1.2 core schema, nothing else."""


CoreResolver.add_implicit_resolver(
    NULL_TAG,
    re.compile(r"^(?:~|null|Null|NULL|)$"),
    ["~", "n", "N", ""],
)
CoreResolver.add_implicit_resolver(
    BOOL_TAG,
    re.compile(r"^(?:true|True|TRUE|false|False|FALSE)$"),
    list("tTfF"),
)
# Registered before floats so that "1" stays an int.
CoreResolver.add_implicit_resolver(
    INT_TAG,
    re.compile(r"^(?:[-+]?[0-9]+|0o[0-7]+|0x[0-9a-fA-F]+)$"),
    list("-+0123456789"),
)
CoreResolver.add_implicit_resolver(
    FLOAT_TAG,
    re.compile(
        r"""^(?:[-+]?(?:\.[0-9]+|[0-9]+(?:\.[0-9]*)?)(?:[eE][-+]?[0-9]+)?
        |[-+]?\.(?:inf|Inf|INF)
        |\.(?:nan|NaN|NAN))$""",
        re.X,
    ),
    list("-+0123456789."),
)

_resolver = CoreResolver()


def resolve_scalar(value: str, implicit: Tuple[bool, bool]) -> str:
    """Return the tag a scalar without an explicit tag resolves to.

    ``implicit`` is PyYAML's pair: (plain, quoted). Quoted scalars always
    resolve to str.
    """
    return _resolver.resolve(ScalarNode, value, implicit)


def construct_scalar(tag: str, value: str) -> Any:
    """Build the Python value for scalar text resolved to ``tag``.

    Tags outside the core schema return ``value`` unchanged.

    Raises:
        ValueError: ``value`` is not valid text for ``tag``.
    """
    if tag == NULL_TAG:
        return None
    if tag == BOOL_TAG:
        lowered = value.lower()
        if lowered not in ("true", "false"):
            raise ValueError(value)
        return lowered == "true"
    if tag == INT_TAG:
        if value.startswith(("0o", "0x")):
            return int(value, 0)
        return int(value)
    if tag == FLOAT_TAG:
        lowered = value.lower()
        if lowered in (".inf", "+.inf"):
            return math.inf
        if lowered == "-.inf":
            return -math.inf
        if lowered == ".nan":
            return math.nan
        return float(value)
    return value
