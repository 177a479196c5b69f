import itertools
from typing import Any, Dict, Iterator, List, Optional, Tuple


class BSTNode:
    """
    One key of the tree. ``x``/``y``/``highlighted``/``found`` are view
    decoration only and are rewritten on every render pass.
    """

    __slots__ = ("node_id", "value", "left", "right", "x", "y", "highlighted", "found")

    def __init__(self, node_id: int, value: int):
        self.node_id = node_id
        self.value = value
        self.left: Optional["BSTNode"] = None
        self.right: Optional["BSTNode"] = None
        self.x = 0.0
        self.y = 0.0
        self.highlighted = False
        self.found = False

    @property
    def is_leaf(self) -> bool:
        return self.left is None and self.right is None

    def __repr__(self):
        return f"BSTNode({self.value})"


class BSTModel:
    """
    Binary search tree over unique integer keys.

    Nodes own their children directly; each node also gets a stable id so
    the view can keep scene items in sync. Nothing here raises for an
    integer argument: misses and empty trees come back as False, None or [].
    """

    def __init__(self):
        self._id_iter = itertools.count()
        self.root: Optional[BSTNode] = None

    @property
    def is_empty(self) -> bool:
        return self.root is None

    def clear(self):
        self.root = None
        self._id_iter = itertools.count()

    def build(self, values) -> int:
        """Replace the tree with ``values`` inserted in order; returns how many went in."""
        self.clear()
        return sum(1 for value in values if self.insert(value))

    # ---------- Mutation ----------

    def insert(self, value: int) -> bool:
        if self.root is None:
            self.root = self._make_node(value)
            return True

        current = self.root
        while True:
            if value == current.value:
                return False
            if value < current.value:
                if current.left is None:
                    current.left = self._make_node(value)
                    return True
                current = current.left
            else:
                if current.right is None:
                    current.right = self._make_node(value)
                    return True
                current = current.right

    def delete(self, value: int) -> bool:
        parent = None
        direction = None
        current = self.root

        while current is not None and current.value != value:
            parent = current
            if value < current.value:
                direction = "left"
                current = current.left
            else:
                direction = "right"
                current = current.right

        if current is None:
            return False

        if current.left is not None and current.right is not None:
            # Two children: take over the successor's value, then unlink the
            # successor from the right subtree. It never has a left child.
            succ_parent = current
            succ_direction = "right"
            successor = current.right
            while successor.left is not None:
                succ_parent = successor
                succ_direction = "left"
                successor = successor.left
            current.value = successor.value
            self._replace_child(succ_parent, succ_direction, successor.right)
        else:
            replacement = current.left if current.left is not None else current.right
            self._replace_child(parent, direction, replacement)
        return True

    # ---------- Queries ----------

    def search(self, value: int) -> Tuple[bool, List[BSTNode]]:
        """
        Returns (found, path). ``path`` lists every node visited from the
        root; on a miss it ends at the last node before falling off.
        """
        path: List[BSTNode] = []
        current = self.root
        while current is not None:
            path.append(current)
            if value == current.value:
                return True, path
            current = current.left if value < current.value else current.right
        return False, path

    def contains(self, value: int) -> bool:
        return self.search(value)[0]

    @staticmethod
    def min_node(node: Optional[BSTNode]) -> Optional[BSTNode]:
        if node is None:
            return None
        while node.left is not None:
            node = node.left
        return node

    @staticmethod
    def max_node(node: Optional[BSTNode]) -> Optional[BSTNode]:
        if node is None:
            return None
        while node.right is not None:
            node = node.right
        return node

    def find_min(self) -> Optional[BSTNode]:
        return self.min_node(self.root)

    def find_max(self) -> Optional[BSTNode]:
        return self.max_node(self.root)

    def size(self) -> int:
        return sum(1 for _ in self.nodes())

    def height(self) -> int:
        """Number of nodes on the deepest root-to-leaf path; 0 when empty."""
        if self.root is None:
            return 0
        height = 0
        level = [self.root]
        while level:
            height += 1
            level = [child for node in level for child in (node.left, node.right) if child is not None]
        return height

    def count_leaves(self) -> int:
        return sum(1 for node in self.nodes() if node.is_leaf)

    def is_valid_bst(self) -> bool:
        stack: List[Tuple[Optional[BSTNode], Optional[int], Optional[int]]] = [(self.root, None, None)]
        while stack:
            node, low, high = stack.pop()
            if node is None:
                continue
            if (low is not None and node.value <= low) or (high is not None and node.value >= high):
                return False
            stack.append((node.left, low, node.value))
            stack.append((node.right, node.value, high))
        return True

    # ---------- Traversals ----------

    def inorder(self) -> Tuple[List[int], List[BSTNode]]:
        order: List[BSTNode] = []
        stack: List[BSTNode] = []
        current = self.root
        while stack or current is not None:
            while current is not None:
                stack.append(current)
                current = current.left
            current = stack.pop()
            order.append(current)
            current = current.right
        return [node.value for node in order], order

    def preorder(self) -> Tuple[List[int], List[BSTNode]]:
        order = list(self.nodes())
        return [node.value for node in order], order

    def postorder(self) -> Tuple[List[int], List[BSTNode]]:
        # Reverse of a root-right-left walk.
        order: List[BSTNode] = []
        stack = [self.root] if self.root is not None else []
        while stack:
            node = stack.pop()
            order.append(node)
            if node.left is not None:
                stack.append(node.left)
            if node.right is not None:
                stack.append(node.right)
        order.reverse()
        return [node.value for node in order], order

    def traverse(self, order: str) -> Tuple[List[int], List[BSTNode]]:
        walkers = {
            "inorder": self.inorder,
            "preorder": self.preorder,
            "postorder": self.postorder,
        }
        return walkers[order]()

    def nodes(self) -> Iterator[BSTNode]:
        """Pre-order iteration over every node."""
        stack = [self.root] if self.root is not None else []
        while stack:
            node = stack.pop()
            yield node
            if node.right is not None:
                stack.append(node.right)
            if node.left is not None:
                stack.append(node.left)

    # ---------- Decoration ----------

    def clear_highlights(self):
        for node in self.nodes():
            node.highlighted = False
            node.found = False

    def snapshot(self) -> Dict[str, Any]:
        return {
            "root": self.root.node_id if self.root else None,
            "nodes": [
                {
                    "id": node.node_id,
                    "value": node.value,
                    "left": node.left.node_id if node.left else None,
                    "right": node.right.node_id if node.right else None,
                }
                for node in self.nodes()
            ],
        }

    # ---------- Internal helpers ----------

    def _make_node(self, value):
        return BSTNode(next(self._id_iter), value)

    def _replace_child(self, parent, direction, new_child):
        if parent is None:
            self.root = new_child
        else:
            setattr(parent, direction, new_child)
