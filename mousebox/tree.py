"""A general tree whose nodes keep their children in order."""

from __future__ import annotations

import weakref
from collections import deque
from typing import Deque, Generic, Iterator, Optional, TypeVar

T = TypeVar("T")


class TreeNode(Generic[T]):
    """A node holding a value, a weak link to its parent and ordered children."""

    def __init__(self, data: Optional[T] = None) -> None:
        self.data = data
        self._parent: Optional[weakref.ref[TreeNode[T]]] = None
        self.children: Deque[TreeNode[T]] = deque()

    @property
    def parent(self) -> Optional[TreeNode[T]]:
        return self._parent() if self._parent is not None else None

    @parent.setter
    def parent(self, node: Optional[TreeNode[T]]) -> None:
        self._parent = weakref.ref(node) if node is not None else None

    def add_node(self, subroot: TreeNode[T]) -> TreeNode[T]:
        """Attach a node as the last child and return it."""
        subroot.parent = self
        self.children.append(subroot)
        return subroot

    def child(self, idx: int) -> TreeNode[T]:
        return self.children[idx]

    def __iter__(self) -> Iterator[TreeNode[T]]:
        return iter(self.children)

    def __len__(self) -> int:
        return len(self.children)

    def __repr__(self) -> str:
        return f"TreeNode({self.data!r}, children={len(self.children)})"


class Tree(Generic[T]):
    def __init__(self) -> None:
        self.root: Optional[TreeNode[T]] = None

    def set_root(self, item: T) -> TreeNode[T]:
        """Replace the root with a fresh node holding an item."""
        self.root = TreeNode(item)
        return self.root