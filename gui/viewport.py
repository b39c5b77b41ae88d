"""
Zoomable SVG viewport for displaying rendered PRG programs.
"""
from PySide6.QtWidgets import QGraphicsScene, QGraphicsView
from PySide6.QtSvg import QSvgRenderer
from PySide6.QtSvgWidgets import QGraphicsSvgItem
from PySide6.QtGui import QColor, QPainter
from PySide6.QtCore import QByteArray, Qt


class Viewport(QGraphicsView):
    """2D viewport with wheel zoom and drag pan."""

    MIN_SCALE = 0.1
    MAX_SCALE = 10.0
    ZOOM_STEP = 1.15

    def __init__(self, parent=None):
        super().__init__(parent)

        self.graphics_scene = QGraphicsScene(self)
        self.setScene(self.graphics_scene)
        self.renderer = QSvgRenderer()
        self.svg_item = None
        self.current_scale = 1.0

        self.setRenderHint(QPainter.Antialiasing)
        self.setDragMode(QGraphicsView.ScrollHandDrag)
        self.setTransformationAnchor(QGraphicsView.AnchorUnderMouse)
        self.setBackgroundBrush(QColor('#ffffff'))

    def set_svg(self, svg_content: str):
        """Display a new SVG document; zoom and pan are reset."""
        self.graphics_scene.clear()
        self.renderer.load(QByteArray(svg_content.encode('utf-8')))

        self.svg_item = QGraphicsSvgItem()
        self.svg_item.setSharedRenderer(self.renderer)
        self.graphics_scene.addItem(self.svg_item)
        self.graphics_scene.setSceneRect(self.svg_item.boundingRect())
        self.reset_view()

    def wheelEvent(self, event):
        """Handle mouse wheel for zooming."""
        factor = self.ZOOM_STEP if event.angleDelta().y() > 0 else 1 / self.ZOOM_STEP
        new_scale = self.current_scale * factor
        if self.MIN_SCALE <= new_scale <= self.MAX_SCALE:
            self.current_scale = new_scale
            self.scale(factor, factor)

    def reset_view(self):
        """Reset zoom and pan."""
        self.resetTransform()
        self.current_scale = 1.0
        if self.svg_item is not None:
            self.centerOn(self.svg_item)

    def fit_to_window(self):
        if self.svg_item is not None:
            self.fitInView(self.svg_item, Qt.KeepAspectRatio)
            self.current_scale = self.transform().m11()
