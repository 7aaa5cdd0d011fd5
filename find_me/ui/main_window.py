# =====================================================
# =============== 游戏主窗口 ===============
# =====================================================

"""
游戏主窗口 - 承载聚光灯画布，状态栏提示当前状态
"""

import random
from typing import Optional

from PySide6.QtCore import Signal
from PySide6.QtGui import QColor
from PySide6.QtWidgets import QMainWindow, QWidget

from find_me import __app_name__
from find_me.core.assets import load_game_assets
from find_me.core.async_logger import async_main_log
from find_me.core.config_manager import GameConfig
from find_me.core.spotlight_controller import GameState, SpotlightController
from find_me.ui.spotlight_surface import SpotlightSurface


STATUS_MESSAGES = {
    GameState.IDLE: "按住鼠标移动聚光灯，松开时对准目标即可获胜",
    GameState.REVEALING: "寻找中……",
    GameState.WON: "找到了！再次按下开始新一局",
}


class FindMeWindow(QMainWindow):
    """游戏主窗口"""

    state_changed = Signal(object)  # 游戏状态变化，参数为 GameState

    def __init__(self, config: Optional[GameConfig] = None, parent: Optional[QWidget] = None):
        """初始化主窗口

        Args:
            config: 游戏配置，默认使用内置配置
            parent: 父窗口
        """
        super().__init__(parent)

        self._config = config or GameConfig()

        target, mask = load_game_assets(self._config)
        self._controller = SpotlightController(
            target,
            mask,
            rng=random.Random(self._config.random_seed),
            background_color=QColor(self._config.background_color),
            cover_color=QColor(self._config.cover_color),
            state_listener=self._on_state_changed,
        )

        self._surface = SpotlightSurface(self._controller, self)

        self.setWindowTitle(__app_name__)
        self.setCentralWidget(self._surface)
        self.resize(self._config.window_width, self._config.window_height)
        self.statusBar().showMessage(STATUS_MESSAGES[self._controller.state])

        async_main_log(
            f"主窗口创建: {self._config.window_width}x{self._config.window_height}, "
            f"目标 {target.width()}x{target.height()}, 遮罩 {mask.width()}x{mask.height()}"
        )

    @property
    def controller(self) -> SpotlightController:
        return self._controller

    @property
    def surface(self) -> SpotlightSurface:
        return self._surface

    def _on_state_changed(self, state: GameState):
        self.statusBar().showMessage(STATUS_MESSAGES[state])
        self.state_changed.emit(state)
