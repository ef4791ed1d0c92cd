"""Base types shared by the AVL tree implementation"""

from abc import ABC, abstractmethod
from typing import Any, Callable, Generic, NamedTuple, Optional, TypeVar

T = TypeVar("T", bound="AbstractSetDataStructure")

Comparator = Callable[[Any, Any], int]


def default_comparator(a: Any, b: Any) -> int:
    """
    Three-way comparison using the natural ordering of the keys.

    Returns:
        int: A negative number if a < b, zero if equal, a positive number if a > b.
    """
    return (a > b) - (a < b)


class AbstractSetDataStructure(ABC, Generic[T]):
    """
    Abstract base class for an ordered set data structure of keys.
    """

    @abstractmethod
    def insert(self, key: Any) -> T:
        """
        Insert a key into the set.

        Parameters:
            key: The key to be inserted.

        Returns:
            AbstractSetDataStructure: The set data structure instance containing the key.
        """
        pass

    @abstractmethod
    def delete(self, key: Any) -> T:
        """
        Delete the given key from the set data structure.

        Parameters:
            key: The key to be deleted.

        Returns:
            AbstractSetDataStructure: The set data structure instance after deletion.
        """
        pass

    @abstractmethod
    def retrieve(self, key: Any) -> 'RetrievalResult':
        """
        Retrieve the key equal to `key` and its successor from the set data structure.

        Parameters:
            key: The key to look up.

        Returns:
            RetrievalResult: A named tuple containing:
                - found_key: The stored key equal to `key` if present; otherwise, None.
                - next_key: The next key in sorted order, or None if no
                            subsequent key exists.
        """
        pass


class RetrievalResult(NamedTuple):
    """
    A container for the result of a lookup in an AbstractSetDataStructure.

    Attributes:
        found_key (Optional[Any]):
            The stored key equal to the searched key if found; otherwise, None.
        next_key (Optional[Any]):
            The smallest stored key strictly greater than the searched key;
            None if no subsequent key exists.
    """
    found_key: Optional[Any]
    next_key: Optional[Any]


class InvalidStructureError(Exception):
    """Raised when an AVL tree invariant is violated."""

    def __init__(self, key: Any, invariant: str, detail: str = ""):
        self.key = key
        self.invariant = invariant
        self.detail = detail
        message = f"Invariant failed: {invariant} at node with key {key!r}"
        if detail:
            message = f"{message} ({detail})"
        super().__init__(message)
