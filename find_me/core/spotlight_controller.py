# =====================================================
# =============== 聚光灯控制器 ===============
# =====================================================

"""
聚光灯控制器 - 游戏状态机与绘制编排

状态:
    IDLE       未按下，整屏遮挡
    REVEALING  按下中，聚光灯跟随指针
    WON        抬起时指针落在目标上，目标完整显示直到下一次按下

每次指针事件都会把覆盖图案的中心对准指针并请求重绘；
on_draw 只读状态，不做任何修改。
"""

import random
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional, Tuple

from PySide6.QtCore import QPointF, QRect, Qt
from PySide6.QtGui import QColor, QImage, QPainter

from find_me.core.async_logger import async_game_log
from find_me.core.mask_renderer import MaskRenderer, RevealPattern
from find_me.core.surface_handler import PointerAction, SurfaceHandler


class GameState(Enum):
    """游戏状态"""
    IDLE = "idle"
    REVEALING = "revealing"
    WON = "won"


@dataclass(frozen=True)
class TargetPlacement:
    """目标图像在画布上的位置（左上角 + 尺寸）"""
    x: int
    y: int
    width: int
    height: int

    @property
    def right(self) -> int:
        return self.x + self.width

    @property
    def bottom(self) -> int:
        return self.y + self.height

    def contains(self, px: float, py: float) -> bool:
        """点是否落在 [x, right) x [y, bottom) 内"""
        return self.x <= px < self.right and self.y <= py < self.bottom

    def rect(self) -> QRect:
        return QRect(self.x, self.y, self.width, self.height)

    @classmethod
    def place_randomly(
        cls,
        rng: random.Random,
        canvas_width: int,
        canvas_height: int,
        target_width: int,
        target_height: int,
    ) -> "TargetPlacement":
        """在画布内随机放置目标

        目标比画布大时，该方向的取值范围收缩为 0，目标贴住左/上边缘。
        """
        max_x = max(0, canvas_width - target_width)
        max_y = max(0, canvas_height - target_height)
        return cls(
            x=rng.randint(0, max_x),
            y=rng.randint(0, max_y),
            width=target_width,
            height=target_height,
        )


class SpotlightController(SurfaceHandler):
    """聚光灯游戏控制器

    使用示例:
        controller = SpotlightController(target_image, mask_image)
        surface.set_handler(controller)
    """

    def __init__(
        self,
        target: QImage,
        mask: QImage,
        rng: Optional[random.Random] = None,
        background_color: Optional[QColor] = None,
        cover_color: Optional[QColor] = None,
        state_listener: Optional[Callable[[GameState], None]] = None,
    ):
        """初始化控制器

        Args:
            target: 要寻找的目标图像
            mask: 聚光灯形状遮罩
            rng: 随机源，测试时可注入固定种子或 mock
            background_color: 清屏背景色，默认白色
            cover_color: 未按下时的遮挡色，默认黑色
            state_listener: 状态变化回调
        """
        self._target = target
        self._pattern: RevealPattern = MaskRenderer.build(mask)
        self._rng = rng if rng is not None else random.Random()
        self._background_color = background_color if background_color is not None else QColor(Qt.GlobalColor.white)
        self._cover_color = cover_color if cover_color is not None else QColor(Qt.GlobalColor.black)
        self._state_listener = state_listener

        # 画布尺寸，首次 on_resize 前为 0
        self._width: int = 0
        self._height: int = 0

        # 首次 on_resize 前没有放置位置
        self._placement: Optional[TargetPlacement] = None

        self._is_spotlight_active: bool = False
        self._is_won: bool = False
        self._pointer_position: Tuple[float, float] = (0.0, 0.0)

    # ========== 只读状态 ==========

    @property
    def state(self) -> GameState:
        if self._is_won:
            return GameState.WON
        if self._is_spotlight_active:
            return GameState.REVEALING
        return GameState.IDLE

    @property
    def is_won(self) -> bool:
        return self._is_won

    @property
    def is_spotlight_active(self) -> bool:
        return self._is_spotlight_active

    @property
    def pointer_position(self) -> Tuple[float, float]:
        return self._pointer_position

    @property
    def placement(self) -> Optional[TargetPlacement]:
        return self._placement

    @property
    def pattern(self) -> RevealPattern:
        return self._pattern

    @property
    def canvas_size(self) -> Tuple[int, int]:
        return self._width, self._height

    def set_state_listener(self, listener: Optional[Callable[[GameState], None]]):
        self._state_listener = listener

    # ========== 放置 ==========

    def regenerate_placement(self) -> TargetPlacement:
        """按当前画布尺寸重新随机放置目标"""
        self._placement = TargetPlacement.place_randomly(
            self._rng,
            self._width,
            self._height,
            self._target.width(),
            self._target.height(),
        )
        async_game_log(
            f"目标放置于 ({self._placement.x}, {self._placement.y}), "
            f"画布 {self._width}x{self._height}"
        )
        return self._placement

    # ========== 宿主回调 ==========

    def on_resize(self, width: int, height: int):
        self._width = width
        self._height = height
        self.regenerate_placement()

    def on_pointer_event(self, action: PointerAction, x: float, y: float):
        previous = self.state
        position = (float(x), float(y))

        if action is PointerAction.DOWN:
            if self._is_won:
                # 新一局
                self._is_won = False
                self.regenerate_placement()
            self._pointer_position = position
            self._is_spotlight_active = True

        elif action is PointerAction.MOVE:
            self._pointer_position = position

        elif action is PointerAction.UP:
            self._pointer_position = position
            # 只有按下后的抬起才判定
            if self._is_spotlight_active:
                self._is_spotlight_active = False
                self._is_won = self._placement is not None and self._placement.contains(*position)

        self._pattern = MaskRenderer.centered_origin(self._pattern, *position)
        self.request_redraw()

        current = self.state
        if current is not previous:
            async_game_log(f"状态 {previous.value} -> {current.value} @ ({position[0]:.0f}, {position[1]:.0f})")
            if self._state_listener is not None:
                self._state_listener(current)

    def on_draw(self, painter: QPainter):
        canvas = QRect(0, 0, self._width, self._height)

        painter.fillRect(canvas, self._background_color)

        if self._placement is not None:
            painter.drawImage(QPointF(self._placement.x, self._placement.y), self._target)

        if self._is_won:
            return

        if self._is_spotlight_active:
            MaskRenderer.paint_over(painter, canvas, self._pattern)
        else:
            painter.fillRect(canvas, self._cover_color)
