from __future__ import annotations
import copy as _copy
import logging
from dataclasses import dataclass
from typing import Any, Callable, Generic, Iterator, Optional, Protocol, TypeVar

from .. import exceptions
from ..types import DuplicatePolicy, InsertOutcome, TraversalOrder

logger = logging.getLogger(__name__)


class Ordered(Protocol):
    def __lt__(self, other: Any, /) -> bool: ...
    def __gt__(self, other: Any, /) -> bool: ...
    def __eq__(self, other: object, /) -> bool: ...


T = TypeVar("T", bound=Ordered)
A = TypeVar("A")

_POLICIES = ("reject", "raise", "overwrite", "ignore")


@dataclass
class _Node(Generic[T]):
    item: T
    left: Optional[int] = None
    right: Optional[int] = None


class OrderedStore(Generic[T]):
    """
    Unbalanced binary search tree that owns its payload.

    Nodes live in an arena (a list) and refer to their children by slot id,
    so other structures can hold a slot id instead of a second reference to
    the payload. Slots are never freed; there is no delete.

    All walks are iterative with an explicit stack, so a degenerate tree
    (sorted insertion order) costs O(n) time but never hits the recursion
    limit.
    """

    def __init__(self, duplicate_policy: DuplicatePolicy = "reject") -> None:
        exceptions.require(
            duplicate_policy in _POLICIES,
            f"Unknown duplicate policy {duplicate_policy!r}; expected one of {_POLICIES}",
            exceptions.StoreError,
        )
        self.duplicate_policy: DuplicatePolicy = duplicate_policy
        self._nodes: list[_Node[T]] = []
        self._root: Optional[int] = None

    # -- insert / lookup -------------------------------------------------

    def insert(self, item: T) -> InsertOutcome:
        outcome, _ = self.insert_slot(item)
        return outcome

    def insert_slot(self, item: T) -> tuple[InsertOutcome, Optional[int]]:
        """
        Insert and report where the item ended up.

        Returns (outcome, slot). slot is None when the item was rejected.
        """
        if self._root is None:
            self._root = self._new_node(item)
            return "inserted", self._root

        slot = self._root
        while True:
            node = self._nodes[slot]
            if item < node.item:
                if node.left is None:
                    node.left = self._new_node(item)
                    return "inserted", node.left
                slot = node.left
            elif item > node.item:
                if node.right is None:
                    node.right = self._new_node(item)
                    return "inserted", node.right
                slot = node.right
            else:
                return self._on_duplicate(slot, item)

    def _new_node(self, item: T) -> int:
        self._nodes.append(_Node(item))
        return len(self._nodes) - 1

    def _on_duplicate(self, slot: int, item: T) -> tuple[InsertOutcome, Optional[int]]:
        policy = self.duplicate_policy
        if policy == "overwrite":
            self._nodes[slot].item = item
            return "replaced", slot
        if policy == "raise":
            raise exceptions.DuplicateRecordError(f"Duplicate key: {item}")
        if policy == "reject":
            logger.warning("Rejected duplicate key %s", item)
        return "rejected", None

    def find_slot(self, key: T) -> Optional[int]:
        slot = self._root
        while slot is not None:
            node = self._nodes[slot]
            if key < node.item:
                slot = node.left
            elif key > node.item:
                slot = node.right
            else:
                return slot
        return None

    def search(self, key: T) -> Optional[T]:
        slot = self.find_slot(key)
        return None if slot is None else self._nodes[slot].item

    def __contains__(self, key: object) -> bool:
        return self.find_slot(key) is not None  # type: ignore[arg-type]

    def get(self, slot: int) -> T:
        if not 0 <= slot < len(self._nodes):
            raise exceptions.StoreError(f"No node in slot {slot}")
        return self._nodes[slot].item

    # -- traversal -------------------------------------------------------

    def walk(self, order: TraversalOrder = "in") -> Iterator[T]:
        for slot in self._walk_slots(order):
            yield self._nodes[slot].item

    def _walk_slots(self, order: TraversalOrder) -> Iterator[int]:
        if order == "in":
            yield from self._in_order()
        elif order == "pre":
            yield from self._pre_order()
        elif order == "post":
            yield from self._post_order()
        else:
            raise exceptions.StoreError(f"Unknown traversal order {order!r}")

    def _in_order(self) -> Iterator[int]:
        stack: list[int] = []
        slot = self._root
        while stack or slot is not None:
            while slot is not None:
                stack.append(slot)
                slot = self._nodes[slot].left
            slot = stack.pop()
            yield slot
            slot = self._nodes[slot].right

    def _pre_order(self) -> Iterator[int]:
        stack = [] if self._root is None else [self._root]
        while stack:
            slot = stack.pop()
            yield slot
            node = self._nodes[slot]
            if node.right is not None:
                stack.append(node.right)
            if node.left is not None:
                stack.append(node.left)

    def _post_order(self) -> Iterator[int]:
        # Reverse of a (node, right, left) pre-order walk
        out: list[int] = []
        stack = [] if self._root is None else [self._root]
        while stack:
            slot = stack.pop()
            out.append(slot)
            node = self._nodes[slot]
            if node.left is not None:
                stack.append(node.left)
            if node.right is not None:
                stack.append(node.right)
        yield from reversed(out)

    def traverse(self, visit: Callable[[T], None], order: TraversalOrder = "in") -> None:
        """Call visit once per stored item. Visitors must not mutate the store."""
        for item in self.walk(order):
            visit(item)

    def accumulate(
        self,
        visit: Callable[[T, A], None],
        acc: A,
        order: TraversalOrder = "in",
    ) -> A:
        """Walk the tree passing one accumulator through every visit; returns it."""
        for item in self.walk(order):
            visit(item, acc)
        return acc

    def __iter__(self) -> Iterator[T]:
        return self.walk("in")

    # -- shape -----------------------------------------------------------

    def size(self) -> int:
        return len(self._nodes)

    def __len__(self) -> int:
        return self.size()

    def is_empty(self) -> bool:
        return self._root is None

    def height(self) -> int:
        """Edges on the longest root-to-leaf path; -1 when empty."""
        if self._root is None:
            return -1
        best = 0
        stack = [(self._root, 0)]
        while stack:
            slot, depth = stack.pop()
            best = max(best, depth)
            node = self._nodes[slot]
            if node.left is not None:
                stack.append((node.left, depth + 1))
            if node.right is not None:
                stack.append((node.right, depth + 1))
        return best

    def check_invariant(self) -> bool:
        """True if every left subtree strictly precedes and every right strictly follows."""
        if self._root is None:
            return True
        seen = 0
        stack: list[tuple[int, Optional[T], Optional[T]]] = [(self._root, None, None)]
        while stack:
            slot, lo, hi = stack.pop()
            seen += 1
            item = self._nodes[slot].item
            if lo is not None and not item > lo:
                return False
            if hi is not None and not item < hi:
                return False
            node = self._nodes[slot]
            if node.left is not None:
                stack.append((node.left, lo, item))
            if node.right is not None:
                stack.append((node.right, item, hi))
        # every arena slot must be reachable from the root
        return seen == len(self._nodes)

    def clear(self) -> None:
        self._nodes = []
        self._root = None

    # -- copying ---------------------------------------------------------

    def copy(self) -> "OrderedStore[T]":
        """Deep copy: same shape and slot ids, every payload copied."""
        out: OrderedStore[T] = OrderedStore(self.duplicate_policy)
        out._nodes = [
            _Node(_copy.deepcopy(n.item), n.left, n.right) for n in self._nodes
        ]
        out._root = self._root
        return out

    def __copy__(self) -> "OrderedStore[T]":
        return self.copy()

    def __deepcopy__(self, memo: dict) -> "OrderedStore[T]":
        return self.copy()

    def __repr__(self) -> str:
        return f"OrderedStore(size={self.size()}, height={self.height()})"
