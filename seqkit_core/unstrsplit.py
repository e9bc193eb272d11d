"""Joining groups of sequences with a separator."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import TypeVar, Union

S = TypeVar("S", str, bytes)


def unstrsplit(
    x: Union[Sequence[Sequence[S]], Mapping[object, Sequence[S]]], sep: S
) -> Union[list[S], dict[object, S]]:
    """Join the sequences of each group with ``sep``.

    A mapping keeps its keys (the names of the groups); any other sequence
    of groups gives a list parallel to ``x``.
    """
    if isinstance(x, Mapping):
        return {name: sep.join(group) for name, group in x.items()}
    return [sep.join(group) for group in x]