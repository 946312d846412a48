import logging
import os
from dataclasses import dataclass
from typing import TypeVar, Generic, Iterator, Optional

from binary_tree import BinaryTree
from contracts import ensure, require

T = TypeVar('T')

_logger = logging.getLogger(__name__)

_TRUE_VALUES = {"1", "true", "yes", "on"}


def _env_flag(name: str, default: bool) -> bool:
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in _TRUE_VALUES


@dataclass
class TreeSetConfig:
    """Runtime checks performed by an OrderedTreeSet."""

    check_invariants: bool = False  # verify ordering and size after each mutation

    @classmethod
    def from_env(cls) -> 'TreeSetConfig':
        return cls(check_invariants=_env_flag("TREE_SET_CHECK_INVARIANTS", False))


_default_config: Optional[TreeSetConfig] = None


def default_config() -> TreeSetConfig:
    global _default_config
    if _default_config is None:
        _default_config = TreeSetConfig.from_env()
    return _default_config


def _compare(x: T, label: T) -> int:
    if x == label:
        return 0
    return 1 if x > label else -1


def _is_in_tree(t: BinaryTree[T], x: T) -> bool:
    if t.is_empty():
        return False
    order = _compare(x, t.root())
    root, left, right = t.disassemble()
    try:
        if order == 0:
            return True
        if order > 0:
            return _is_in_tree(right, x)
        return _is_in_tree(left, x)
    finally:
        t.assemble(root, left, right)


def _insert_in_tree(t: BinaryTree[T], x: T) -> None:
    if t.is_empty():
        t.assemble(x, t.new_instance(), t.new_instance())
        return
    order = _compare(x, t.root())
    require(order != 0, f"{x!r} is already in the set")
    root, left, right = t.disassemble()
    try:
        if order > 0:
            _insert_in_tree(right, x)
        else:
            _insert_in_tree(left, x)
    finally:
        t.assemble(root, left, right)


def remove_smallest(t: BinaryTree[T]) -> T:
    """Remove and return the smallest (left-most) label of a non-empty BST."""
    require(not t.is_empty(), "remove_smallest from empty tree")
    root, left, right = t.disassemble()
    if left.is_empty():
        t.transfer_from(right)
        return root
    try:
        return remove_smallest(left)
    finally:
        t.assemble(root, left, right)


def _remove_from_tree(t: BinaryTree[T], x: T) -> T:
    require(not t.is_empty(), f"{x!r} is not in the set")
    order = _compare(x, t.root())
    root, left, right = t.disassemble()
    if order == 0:
        if right.is_empty():
            t.transfer_from(left)
        else:
            t.assemble(remove_smallest(right), left, right)
        return root
    try:
        if order > 0:
            return _remove_from_tree(right, x)
        return _remove_from_tree(left, x)
    finally:
        t.assemble(root, left, right)


def _extreme_in_tree(t: BinaryTree[T], leftmost: bool) -> T:
    root, left, right = t.disassemble()
    try:
        side = left if leftmost else right
        if side.is_empty():
            return root
        return _extreme_in_tree(side, leftmost)
    finally:
        t.assemble(root, left, right)


class OrderedTreeSet(Generic[T]):
    """Set of unique, ordered elements stored as a binary search tree.

    The tree is never balanced; inserting in sorted order builds a chain.
    Every algorithm works by disassembling a subtree into (root, left, right),
    recursing into one side and assembling it again, so the recursion depth
    equals the height of the tree.

    Iteration yields elements in ascending order, from a snapshot taken when
    iteration starts.
    """

    def __init__(self, config: Optional[TreeSetConfig] = None) -> None:
        self._config: TreeSetConfig = config if config is not None else default_config()
        self._create_new_rep()

    def _create_new_rep(self) -> None:
        self._tree: BinaryTree[T] = BinaryTree()

    @property
    def config(self) -> TreeSetConfig:
        return self._config

    def new_instance(self) -> 'OrderedTreeSet[T]':
        return type(self)(self._config)

    def add(self, x: T) -> None:
        require(x is not None, "cannot add None")
        _insert_in_tree(self._tree, x)
        self._after_mutation()

    def remove(self, x: T) -> T:
        """Remove ``x`` and return the stored element equal to it."""
        require(x is not None, "cannot remove None")
        removed = _remove_from_tree(self._tree, x)
        self._after_mutation()
        return removed

    def remove_any(self) -> T:
        """Remove and return the smallest element."""
        require(self._tree.size() > 0, "remove_any from empty set")
        removed = remove_smallest(self._tree)
        self._after_mutation()
        return removed

    def contains(self, x: T) -> bool:
        require(x is not None, "cannot search for None")
        return _is_in_tree(self._tree, x)

    def min(self) -> T:
        require(self._tree.size() > 0, "min from empty set")
        return _extreme_in_tree(self._tree, leftmost=True)

    def max(self) -> T:
        require(self._tree.size() > 0, "max from empty set")
        return _extreme_in_tree(self._tree, leftmost=False)

    def size(self) -> int:
        return self._tree.size()

    def is_empty(self) -> bool:
        return self._tree.size() == 0

    def clear(self) -> None:
        _logger.debug("clearing set of %d elements", self._tree.size())
        self._create_new_rep()

    def transfer_from(self, source: 'OrderedTreeSet[T]') -> None:
        """Take over the contents of ``source``, leaving it empty."""
        require(isinstance(source, OrderedTreeSet), "transfer source is not an OrderedTreeSet")
        require(source is not self, "transfer from self")
        _logger.debug("transferring %d elements", source._tree.size())
        self._tree = source._tree
        source._create_new_rep()

    def copy(self) -> 'OrderedTreeSet[T]':
        clone = self.new_instance()
        for value in self._tree.pre_order():
            clone.add(value)
        return clone

    def add_all(self, other: 'OrderedTreeSet[T]') -> None:
        """Move every element of ``other`` missing from this set into it.

        Afterwards this set is the union of both and ``other`` holds only the
        elements the two sets had in common.
        """
        require(isinstance(other, OrderedTreeSet), "add_all argument is not an OrderedTreeSet")
        require(other is not self, "add_all with self")
        common = other.new_instance()
        while other.size() > 0:
            x = other.remove_any()
            if self.contains(x):
                common.add(x)
            else:
                self.add(x)
        other.transfer_from(common)

    def remove_all(self, other: 'OrderedTreeSet[T]') -> 'OrderedTreeSet[T]':
        """Remove every element of ``other`` from this set and return the removed ones."""
        require(isinstance(other, OrderedTreeSet), "remove_all argument is not an OrderedTreeSet")
        require(other is not self, "remove_all with self")
        removed = self.new_instance()
        for x in other:
            if self.contains(x):
                removed.add(self.remove(x))
        return removed

    def check_invariants(self) -> None:
        count = 0
        previous: Optional[T] = None
        for value in self._tree:
            if count > 0:
                ensure(previous < value, f"{previous!r} is not ordered before {value!r}")
            previous = value
            count += 1
        ensure(count == self._tree.size(),
               f"tree reports size {self._tree.size()} but holds {count} labels")
        _logger.debug("invariants hold for %d elements", count)

    def _after_mutation(self) -> None:
        if self._config.check_invariants:
            self.check_invariants()

    def __len__(self) -> int:
        return self._tree.size()

    def __contains__(self, x: T) -> bool:
        return self.contains(x)

    def __iter__(self) -> Iterator[T]:
        # Every search reassembles the nodes it visits, so walk a snapshot.
        return iter(self._tree.in_order())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, OrderedTreeSet):
            return NotImplemented
        if other is self:
            return True
        if self.size() != other.size():
            return False
        return all(other.contains(x) for x in self)

    def __repr__(self) -> str:
        return f"OrderedTreeSet({self._tree.in_order()})"

    def __str__(self) -> str:
        return "{" + ", ".join(str(x) for x in self._tree) + "}"
