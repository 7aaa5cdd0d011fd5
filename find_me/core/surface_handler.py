# =====================================================
# =============== 画布处理器基类 ===============
# =====================================================

"""
画布处理器基类

宿主画布（QWidget）只负责把绘制、指针和尺寸变化三类回调转发给处理器，
处理器通过 request_redraw() 请求下一次绘制。
"""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Callable, Optional

from PySide6.QtGui import QPainter


class PointerAction(Enum):
    """指针事件类型（单点）"""
    DOWN = "down"
    MOVE = "move"
    UP = "up"


class SurfaceHandler(ABC):
    """画布处理器基类

    所有挂到 SpotlightSurface 上的处理器必须实现三个回调。
    """

    _request_redraw: Optional[Callable[[], None]] = None

    def attach(self, request_redraw: Callable[[], None]):
        """绑定宿主的重绘请求函数

        Args:
            request_redraw: 调用后由宿主安排下一次 on_draw
        """
        self._request_redraw = request_redraw

    def detach(self):
        """解除与宿主的绑定"""
        self._request_redraw = None

    def request_redraw(self):
        """请求重绘，未绑定宿主时忽略"""
        if self._request_redraw is not None:
            self._request_redraw()

    @abstractmethod
    def on_draw(self, painter: QPainter):
        """绘制一帧（只读当前状态）"""
        pass

    @abstractmethod
    def on_pointer_event(self, action: PointerAction, x: float, y: float):
        """处理指针事件

        Args:
            action: 按下/移动/抬起
            x: 画布本地 X 坐标
            y: 画布本地 Y 坐标
        """
        pass

    @abstractmethod
    def on_resize(self, width: int, height: int):
        """画布尺寸变化"""
        pass
