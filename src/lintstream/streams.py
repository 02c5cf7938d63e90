# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Helpers for consuming record sequences from sync or async producers."""

from __future__ import annotations

from collections.abc import AsyncIterable, AsyncIterator, Iterable
from typing import TypeAlias, TypeVar

ItemT = TypeVar("ItemT")

RecordSource: TypeAlias = Iterable[ItemT] | AsyncIterable[ItemT]


async def iterate(source: RecordSource[ItemT]) -> AsyncIterator[ItemT]:
    """Yield items from ``source`` in order, whether it is sync or async.

    Args:
        source: Plain or asynchronous iterable of items.

    Yields:
        ItemT: Items in the order the producer supplies them.
    """

    if isinstance(source, AsyncIterable):
        async for item in source:
            yield item
    else:
        for item in source:
            yield item


__all__ = ["RecordSource", "iterate"]
