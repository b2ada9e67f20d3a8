# Copyright 2025 CrownOps Engineering
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Order-preserving deduplication for selections and org listings."""

from __future__ import annotations

from collections.abc import Callable, Hashable, Iterable
from typing import TypeVar

T = TypeVar("T")
K = TypeVar("K", bound=Hashable)


def dedupe_by(values: Iterable[T], key: Callable[[T], K]) -> list[T]:
    """Keep the first item seen for each ``key(item)``, in traversal order.

    Args:
        values: Items to filter.
        key: Identity used to detect duplicates.

    Returns:
        The surviving items.
    """
    kept: dict[K, T] = {}
    for value in values:
        _ = kept.setdefault(key(value), value)
    return list(kept.values())


def dedupe_preserve(values: Iterable[K]) -> list[K]:
    """Drop repeated hashable items, keeping first occurrences in order."""
    return list(dict.fromkeys(values))


__all__ = ["dedupe_by", "dedupe_preserve"]
