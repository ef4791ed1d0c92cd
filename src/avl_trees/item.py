# -*- coding: utf-8 -*-
# ------------------------------------------------------------------------------
#
#   Copyright 2025 Jannik Hehemann
#
#   Licensed under the Apache License, Version 2.0 (the "License");
#   you may not use this file except in compliance with the License.
#   You may obtain a copy of the License at
#
#       http://www.apache.org/licenses/LICENSE-2.0
#
#   Unless required by applicable law or agreed to in writing, software
#   distributed under the License is distributed on an "AS IS" BASIS,
#   WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
#   See the License for the specific language governing permissions and
#   limitations under the License.
#
# ------------------------------------------------------------------------------

"""Item implementation"""

from typing import Any


class Item:
    """
    Represents an item (a key-value pair) for insertion in AVL trees.

    Items compare on their key only, so a tree of items behaves as an
    ordered map: the value rides along with the key and never influences
    ordering or equality.
    """
    __slots__ = ("key", "value")

    def __init__(self, key: Any, value: Any = None):
        """
        Initialize an Item.

        Parameters:
            key: The item's key. Must be totally ordered.
            value: The item's value.
        """
        self.key = key
        self.value = value

    def short_key(self) -> str:
        """Create a short representation of the key for display purposes."""
        if isinstance(self.key, (bytes, bytearray)):
            s = self.key.hex()
        else:
            s = str(self.key)
        return s if len(s) <= 10 else f"{s[:3]}...{s[-3:]}"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Item):
            return NotImplemented
        return self.key == other.key

    def __lt__(self, other: "Item") -> bool:
        return self.key < other.key

    def __gt__(self, other: "Item") -> bool:
        return self.key > other.key

    def __hash__(self) -> int:
        return hash(self.key)

    def __repr__(self) -> str:
        cls = self.__class__.__name__
        return f"{cls}(key={self.key!r}, value={self.value!r})"

    def __str__(self):
        cls = self.__class__.__name__
        return f"{cls}(key={self.short_key()}, value={self.value})"


def item_comparator(a: Item, b: Item) -> int:
    """Three-way comparison of two items by key."""
    return (a.key > b.key) - (a.key < b.key)
