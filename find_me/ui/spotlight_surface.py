# =====================================================
# =============== 聚光灯画布 ===============
# =====================================================

"""
聚光灯画布 - 把 Qt 的绘制、鼠标和尺寸事件转发给 SurfaceHandler

触摸事件由 Qt 合成为鼠标事件，这里只处理左键单点。
"""

from typing import Optional

from PySide6.QtCore import Qt
from PySide6.QtGui import QMouseEvent, QPainter, QPaintEvent, QResizeEvent
from PySide6.QtWidgets import QWidget

from find_me.core.surface_handler import PointerAction, SurfaceHandler


class SpotlightSurface(QWidget):
    """通用可绘制画布

    使用示例:
        surface = SpotlightSurface()
        surface.set_handler(controller)
    """

    def __init__(self, handler: Optional[SurfaceHandler] = None, parent: Optional[QWidget] = None):
        super().__init__(parent)

        self._handler: Optional[SurfaceHandler] = None

        self.setAttribute(Qt.WidgetAttribute.WA_OpaquePaintEvent)
        self.setCursor(Qt.CursorShape.CrossCursor)

        if handler is not None:
            self.set_handler(handler)

    @property
    def handler(self) -> Optional[SurfaceHandler]:
        return self._handler

    def set_handler(self, handler: SurfaceHandler):
        """注册处理器，并立即同步当前尺寸"""
        if self._handler is not None:
            self._handler.detach()

        self._handler = handler
        handler.attach(self.update)
        handler.on_resize(self.width(), self.height())
        self.update()

    def paintEvent(self, event: QPaintEvent) -> None:
        if self._handler is None:
            return
        painter = QPainter(self)
        try:
            self._handler.on_draw(painter)
        finally:
            painter.end()

    def mousePressEvent(self, event: QMouseEvent) -> None:
        if self._handler is None or event.button() != Qt.MouseButton.LeftButton:
            super().mousePressEvent(event)
            return
        pos = event.position()
        self._handler.on_pointer_event(PointerAction.DOWN, pos.x(), pos.y())
        event.accept()

    def mouseMoveEvent(self, event: QMouseEvent) -> None:
        if self._handler is None or not (event.buttons() & Qt.MouseButton.LeftButton):
            super().mouseMoveEvent(event)
            return
        pos = event.position()
        self._handler.on_pointer_event(PointerAction.MOVE, pos.x(), pos.y())
        event.accept()

    def mouseReleaseEvent(self, event: QMouseEvent) -> None:
        if self._handler is None or event.button() != Qt.MouseButton.LeftButton:
            super().mouseReleaseEvent(event)
            return
        pos = event.position()
        self._handler.on_pointer_event(PointerAction.UP, pos.x(), pos.y())
        event.accept()

    def resizeEvent(self, event: QResizeEvent) -> None:
        super().resizeEvent(event)
        if self._handler is not None:
            size = event.size()
            self._handler.on_resize(size.width(), size.height())
