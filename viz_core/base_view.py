from PyQt5.QtCore import QObject, QRectF, QTimer
from PyQt5.QtWidgets import QGraphicsScene

from viz_core.sequencer import HighlightSequencer


class BaseStructureView(QObject):
    """
    Base class for structure-specific views, providing:
    - shared QGraphicsScene
    - a cancellable highlight sequencer scaled by the global speed
    - canvas binding and scene-rect fitting
    """

    def __init__(self, global_ctrl):
        super().__init__()
        self.global_ctrl = global_ctrl
        self.settings = global_ctrl.settings
        self.scene = QGraphicsScene()
        self.scene.setSceneRect(0, 0, 800, 600)
        self._canvas = None  # bound QGraphicsView (optional)
        self.sequencer = HighlightSequencer(
            schedule=QTimer.singleShot,
            clear=self.clear_decoration,
            render=self.redraw,
            scale_duration=global_ctrl.scale_duration,
        )

    def bind_canvas(self, view):
        self.stop_all_animations()
        self._canvas = view
        if view:
            view.setScene(self.scene)
            view.resetTransform()

    def canvas_width(self) -> float:
        if self._canvas is None:
            return self.scene.sceneRect().width()
        return float(max(1, self._canvas.viewport().width()))

    def canvas_height(self) -> float:
        if self._canvas is None:
            return self.scene.sceneRect().height()
        return float(max(1, self._canvas.viewport().height()))

    def fit_scene_rect(self, padding=60):
        """Keep the viewport area in the scene rect and grow it to cover every item."""
        base = QRectF(0, 0, self.canvas_width(), self.canvas_height())
        items_rect = self.scene.itemsBoundingRect()
        if not items_rect.isNull():
            base = base.united(items_rect.adjusted(-padding, -padding, padding, padding))
        self.scene.setSceneRect(base)

    def stop_all_animations(self):
        if self.sequencer.running:
            self.sequencer.cancel()
            self.clear_decoration()
            self.redraw()

    # Subclasses draw and reset their own decoration.
    def redraw(self):
        raise NotImplementedError

    def clear_decoration(self):
        raise NotImplementedError
