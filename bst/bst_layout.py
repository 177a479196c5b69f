import math
from typing import Optional

from bst.bst_model import BSTModel, BSTNode
from viz_core.settings import DEFAULT_SETTINGS


def compute_layout(model: BSTModel, canvas_width: float, settings=DEFAULT_SETTINGS):
    """
    Write ``x``/``y`` onto every node: root centred at half the canvas width,
    one fixed vertical step per level, horizontal offset halving per depth.
    """
    if model.root is None:
        return
    spacing = min(canvas_width / 4, settings.max_initial_spacing)
    stack = [(model.root, canvas_width / 2, settings.top_margin, spacing)]
    while stack:
        node, x, y, spacing = stack.pop()
        node.x = x
        node.y = y
        next_y = y + settings.level_gap
        if node.left is not None:
            stack.append((node.left, x - spacing, next_y, spacing / 2))
        if node.right is not None:
            stack.append((node.right, x + spacing, next_y, spacing / 2))


def pick(model: BSTModel, x: float, y: float, radius: float = DEFAULT_SETTINGS.node_radius) -> Optional[BSTNode]:
    """First node (pre-order) whose circle contains the point, or None."""
    for node in model.nodes():
        if math.hypot(node.x - x, node.y - y) <= radius:
            return node
    return None
