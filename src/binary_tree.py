from typing import TypeVar, Generic, List, Iterator, Optional, Tuple

from contracts import require

T = TypeVar('T')


class BinaryTree(Generic[T]):
    """Binary tree of labels, manipulated only as whole (root, left, right) triples.

    The tree imposes no ordering on its labels. Content moves between trees
    instead of being shared: ``disassemble`` empties the tree it is called on,
    ``assemble`` and ``transfer_from`` empty the trees passed to them. A handle
    that has given up its content is simply an empty tree and can be reused.
    """

    class Node:
        def __init__(self, value: T, left: 'BinaryTree[T]', right: 'BinaryTree[T]') -> None:
            self.value: T = value
            self.left: BinaryTree[T] = left
            self.right: BinaryTree[T] = right

    def __init__(self) -> None:
        self._node: Optional[BinaryTree.Node] = None
        self._size: int = 0

    def new_instance(self) -> 'BinaryTree[T]':
        return type(self)()

    def size(self) -> int:
        return self._size

    def is_empty(self) -> bool:
        return self._node is None

    def root(self) -> T:
        require(self._node is not None, "root of empty tree")
        return self._node.value

    def disassemble(self) -> Tuple[T, 'BinaryTree[T]', 'BinaryTree[T]']:
        """Split the tree into its root label and two subtrees.

        The returned subtrees now own the children; this tree is left empty.
        """
        require(self._node is not None, "disassemble of empty tree")
        node = self._node
        self._node = None
        self._size = 0
        return node.value, node.left, node.right

    def assemble(self, root: T, left: 'BinaryTree[T]', right: 'BinaryTree[T]') -> None:
        """Make this (empty) tree the node ``(root, left, right)``.

        The contents of ``left`` and ``right`` are moved, so both are empty
        afterwards.
        """
        require(self._node is None, "assemble into non-empty tree")
        require(isinstance(left, BinaryTree) and isinstance(right, BinaryTree),
                "assemble requires BinaryTree subtrees")
        require(left is not self and right is not self, "assemble of a tree into itself")
        require(left is not right, "assemble with the same subtree on both sides")

        left_child = self.new_instance()
        left_child.transfer_from(left)
        right_child = self.new_instance()
        right_child.transfer_from(right)

        self._node = BinaryTree.Node(root, left_child, right_child)
        self._size = 1 + left_child._size + right_child._size

    def transfer_from(self, other: 'BinaryTree[T]') -> None:
        require(isinstance(other, BinaryTree), "transfer source is not a BinaryTree")
        require(other is not self, "transfer from self")
        self._node = other._node
        self._size = other._size
        other._node = None
        other._size = 0

    def clear(self) -> None:
        self._node = None
        self._size = 0

    def height(self) -> int:
        best = 0
        stack: List[Tuple[BinaryTree.Node, int]] = []
        if self._node is not None:
            stack.append((self._node, 1))
        while stack:
            node, depth = stack.pop()
            best = max(best, depth)
            for child in (node.left._node, node.right._node):
                if child is not None:
                    stack.append((child, depth + 1))
        return best

    def in_order(self) -> List[T]:
        return list(self._walk_in_order())

    def pre_order(self) -> List[T]:
        result: List[T] = []
        if self._node is None:
            return result
        stack: List[BinaryTree.Node] = [self._node]
        while stack:
            node = stack.pop()
            result.append(node.value)
            if node.right._node is not None:
                stack.append(node.right._node)
            if node.left._node is not None:
                stack.append(node.left._node)
        return result

    def post_order(self) -> List[T]:
        result: List[T] = []
        if self._node is None:
            return result
        stack: List[BinaryTree.Node] = [self._node]
        while stack:
            node = stack.pop()
            result.append(node.value)
            if node.left._node is not None:
                stack.append(node.left._node)
            if node.right._node is not None:
                stack.append(node.right._node)
        result.reverse()
        return result

    def _walk_in_order(self) -> Iterator[T]:
        stack: List[BinaryTree.Node] = []
        node = self._node
        while stack or node is not None:
            while node is not None:
                stack.append(node)
                node = node.left._node
            node = stack.pop()
            yield node.value
            node = node.right._node

    def __len__(self) -> int:
        return self._size

    def __iter__(self) -> Iterator[T]:
        # Lazy; disassembling the tree while iterating invalidates the walk.
        return self._walk_in_order()

    def __repr__(self) -> str:
        return f"BinaryTree({self.in_order()})"

    def __str__(self) -> str:
        return f"BinaryTree(size={self._size}, height={self.height()})"
