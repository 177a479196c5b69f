from PyQt5.QtCore import QPointF, Qt, pyqtSignal
from PyQt5.QtGui import QPainter, QWheelEvent
from PyQt5.QtWidgets import QGraphicsView


class CustomGraphicsView(QGraphicsView):
    """
    Graphics view with constrained wheel behaviour:
    - normal wheel: vertical panning only
    - Ctrl + wheel: zoom with factor 1.1
    Left clicks are reported in scene coordinates for node picking.
    """

    sceneClicked = pyqtSignal(QPointF)
    resized = pyqtSignal()

    def __init__(self, parent=None):
        super().__init__(parent)
        self.setRenderHints(self.renderHints() | QPainter.Antialiasing | QPainter.TextAntialiasing)
        self.setDragMode(QGraphicsView.NoDrag)
        self.setTransformationAnchor(QGraphicsView.AnchorUnderMouse)
        self.setAlignment(Qt.AlignLeft | Qt.AlignTop)
        self.setInteractive(True)
        self.setViewportUpdateMode(QGraphicsView.FullViewportUpdate)

    def wheelEvent(self, event: QWheelEvent):
        if event.modifiers() & Qt.ControlModifier:
            angle = event.angleDelta().y()
            factor = 1.1 if angle > 0 else (1 / 1.1)
            self.scale(factor, factor)
        else:
            bar = self.verticalScrollBar()
            bar.setValue(bar.value() - int(event.angleDelta().y() * 0.2))
        event.accept()

    def mousePressEvent(self, event):
        if event.button() == Qt.LeftButton:
            self.sceneClicked.emit(self.mapToScene(event.pos()))
        super().mousePressEvent(event)

    def resizeEvent(self, event):
        super().resizeEvent(event)
        self.resized.emit()
