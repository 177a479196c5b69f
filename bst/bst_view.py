from typing import Dict, List, Optional

from PyQt5.QtCore import QPointF, QRectF, Qt, pyqtSignal
from PyQt5.QtGui import QBrush, QColor, QFont, QPainterPath, QPen
from PyQt5.QtWidgets import QGraphicsItem, QGraphicsObject, QGraphicsPathItem, QGraphicsSimpleTextItem

from bst import bst_layout
from bst.bst_model import BSTModel, BSTNode
from viz_core.base_view import BaseStructureView

EMPTY_TREE_TEXT = "Empty Tree - Type a Prolog command to start"


class BSTView(BaseStructureView):
    """
    Draws a ``BSTModel`` onto the scene. Every ``render`` lays the tree out
    again and rebuilds the scene items; highlight playback only restyles the
    existing items.
    """

    nodeSelected = pyqtSignal(int)

    def __init__(self, global_ctrl, model: BSTModel):
        super().__init__(global_ctrl)
        self.model = model
        self.node_items: Dict[int, BSTNodeItem] = {}
        self.edge_items: List[BSTEdgeItem] = []

    # ---------- Public API ----------

    def render(self):
        """Lay out the current tree and draw it from scratch."""
        self.scene.clear()
        self.node_items.clear()
        self.edge_items.clear()

        if self.model.is_empty:
            self._draw_empty_placeholder()
            self.fit_scene_rect()
            return

        bst_layout.compute_layout(self.model, self.canvas_width(), self.settings)
        radius = self.settings.node_radius

        # Edges first so nodes paint over them.
        for node in self.model.nodes():
            for child in (node.left, node.right):
                if child is None:
                    continue
                edge = BSTEdgeItem(QPointF(node.x, node.y), QPointF(child.x, child.y))
                self.scene.addItem(edge)
                self.edge_items.append(edge)

        for node in self.model.nodes():
            item = BSTNodeItem(node.node_id, node.value, radius)
            item.setPos(node.x, node.y)
            item.set_state(highlighted=node.highlighted, found=node.found)
            self.scene.addItem(item)
            self.node_items[node.node_id] = item

        self.fit_scene_rect()

    def redraw(self):
        """Restyle node items from decoration without relaying out."""
        if not self.node_items and not self.model.is_empty:
            self.render()
            return
        for node in self.model.nodes():
            item = self.node_items.get(node.node_id)
            if item is not None:
                item.set_state(highlighted=node.highlighted, found=node.found)

    def clear_decoration(self):
        self.model.clear_highlights()

    def sequence(self, nodes: List[BSTNode], step_ms: int, pause_ms: int, cumulative=False, found=None):
        """Play a highlight sequence; any earlier one is cancelled first."""
        self.model.clear_highlights()
        self.sequencer.play(
            nodes,
            step_ms,
            pause_ms,
            cumulative=cumulative,
            found=found,
        )

    def animate_search(self, path: List[BSTNode], found: bool):
        self.sequence(
            path,
            self.settings.search_step_ms,
            self.settings.search_pause_ms,
            cumulative=True,
            found=path[-1] if found and path else None,
        )

    def animate_traversal(self, nodes: List[BSTNode]):
        self.sequence(nodes, self.settings.traversal_step_ms, self.settings.traversal_pause_ms)

    def pick(self, x: float, y: float) -> Optional[BSTNode]:
        return bst_layout.pick(self.model, x, y, self.settings.node_radius)

    def select_at(self, scene_pos: QPointF) -> Optional[BSTNode]:
        node = self.pick(scene_pos.x(), scene_pos.y())
        if node is None:
            return None
        self.stop_all_animations()
        self.model.clear_highlights()
        node.highlighted = True
        self.redraw()
        self.nodeSelected.emit(node.value)
        return node

    # ---------- Internal helpers ----------

    def _draw_empty_placeholder(self):
        text = QGraphicsSimpleTextItem(EMPTY_TREE_TEXT)
        text.setFont(QFont("Arial", 15))
        text.setBrush(QBrush(QColor("#666666")))
        bounds = text.boundingRect()
        text.setPos(
            self.canvas_width() / 2 - bounds.width() / 2,
            self.canvas_height() / 2 - bounds.height() / 2,
        )
        self.scene.addItem(text)


class BSTNodeItem(QGraphicsObject):
    """Circle centred on its position; colour follows found > highlighted > default."""

    FILL = QColor("#3498db")
    STROKE = QColor("#2874a6")
    HIGHLIGHT_FILL = QColor("#f39c12")
    HIGHLIGHT_STROKE = QColor("#d68910")
    FOUND_FILL = QColor("#27ae60")
    FOUND_STROKE = QColor("#1e8449")

    def __init__(self, node_id, value, radius):
        super().__init__()
        self.node_id = node_id
        self.radius = radius
        self._value = str(value)
        self.fillColor = self.FILL
        self.strokeColor = self.STROKE
        self.setZValue(2)
        self.setFlag(QGraphicsItem.ItemIsSelectable, False)
        self.setAcceptedMouseButtons(Qt.NoButton)

    def boundingRect(self):
        r = self.radius + 2
        return QRectF(-r, -r, 2 * r, 2 * r)

    def paint(self, painter, option, widget=None):
        painter.setRenderHint(painter.Antialiasing)
        painter.setPen(QPen(self.strokeColor, 3))
        painter.setBrush(QBrush(self.fillColor))
        painter.drawEllipse(QPointF(0, 0), self.radius, self.radius)

        font = QFont("Arial", 12)
        font.setBold(True)
        painter.setFont(font)
        painter.setPen(QColor("#ffffff"))
        r = self.radius
        painter.drawText(QRectF(-r, -r, 2 * r, 2 * r), Qt.AlignCenter, self._value)

    def set_state(self, highlighted=False, found=False):
        if found:
            fill, stroke = self.FOUND_FILL, self.FOUND_STROKE
        elif highlighted:
            fill, stroke = self.HIGHLIGHT_FILL, self.HIGHLIGHT_STROKE
        else:
            fill, stroke = self.FILL, self.STROKE
        if fill != self.fillColor or stroke != self.strokeColor:
            self.fillColor = fill
            self.strokeColor = stroke
            self.update()


class BSTEdgeItem(QGraphicsPathItem):
    def __init__(self, start: QPointF, end: QPointF):
        super().__init__()
        pen = QPen(QColor("#34495e"), 2)
        pen.setCapStyle(Qt.RoundCap)
        pen.setJoinStyle(Qt.RoundJoin)
        self.setPen(pen)
        self.setZValue(1)

        path = QPainterPath(start)
        path.lineTo(end)
        self.setPath(path)
