# -*- coding: utf-8 -*-
"""
聚光灯画布与主窗口测试

测试内容：
- 画布把绘制/鼠标/尺寸事件转发给处理器
- 只响应左键
- 主窗口状态栏跟随游戏状态
"""

from unittest.mock import MagicMock

import pytest

from PySide6.QtCore import QEvent, QPointF, QSize, Qt
from PySide6.QtGui import QMouseEvent, QResizeEvent

from find_me.core.config_manager import GameConfig
from find_me.core.image_utils import qimage_to_rgba
from find_me.core.spotlight_controller import GameState, SpotlightController
from find_me.core.surface_handler import PointerAction, SurfaceHandler
from find_me.ui.main_window import FindMeWindow, STATUS_MESSAGES
from find_me.ui.spotlight_surface import SpotlightSurface


def _mouse_event(event_type, x, y, button=Qt.MouseButton.LeftButton, buttons=None):
    if buttons is None:
        buttons = Qt.MouseButton.NoButton if event_type == QEvent.Type.MouseButtonRelease else button
    pos = QPointF(x, y)
    return QMouseEvent(event_type, pos, pos, button, buttons, Qt.KeyboardModifier.NoModifier)


@pytest.fixture
def surface(qtbot):
    surface = SpotlightSurface()
    qtbot.addWidget(surface)
    surface.resize(400, 300)
    return surface


class TestSpotlightSurface:
    """SpotlightSurface 测试"""

    def test_set_handler_attaches_and_syncs_size(self, surface):
        handler = MagicMock(spec=SurfaceHandler)

        surface.set_handler(handler)

        handler.attach.assert_called_once_with(surface.update)
        handler.on_resize.assert_called_once_with(400, 300)
        assert surface.handler is handler

    def test_replacing_handler_detaches_old_one(self, surface):
        old = MagicMock(spec=SurfaceHandler)
        new = MagicMock(spec=SurfaceHandler)

        surface.set_handler(old)
        surface.set_handler(new)

        old.detach.assert_called_once_with()

    def test_mouse_events_forwarded(self, surface):
        handler = MagicMock(spec=SurfaceHandler)
        surface.set_handler(handler)

        surface.mousePressEvent(_mouse_event(QEvent.Type.MouseButtonPress, 10, 20))
        surface.mouseMoveEvent(_mouse_event(
            QEvent.Type.MouseMove, 30, 40,
            button=Qt.MouseButton.NoButton, buttons=Qt.MouseButton.LeftButton
        ))
        surface.mouseReleaseEvent(_mouse_event(QEvent.Type.MouseButtonRelease, 50, 60))

        assert [c.args for c in handler.on_pointer_event.call_args_list] == [
            (PointerAction.DOWN, 10.0, 20.0),
            (PointerAction.MOVE, 30.0, 40.0),
            (PointerAction.UP, 50.0, 60.0),
        ]

    def test_right_button_ignored(self, surface):
        handler = MagicMock(spec=SurfaceHandler)
        surface.set_handler(handler)

        surface.mousePressEvent(_mouse_event(
            QEvent.Type.MouseButtonPress, 10, 20, button=Qt.MouseButton.RightButton
        ))
        surface.mouseMoveEvent(_mouse_event(
            QEvent.Type.MouseMove, 30, 40,
            button=Qt.MouseButton.NoButton, buttons=Qt.MouseButton.NoButton
        ))

        handler.on_pointer_event.assert_not_called()

    def test_resize_forwarded(self, surface):
        handler = MagicMock(spec=SurfaceHandler)
        surface.set_handler(handler)
        handler.on_resize.reset_mock()

        surface.resizeEvent(QResizeEvent(QSize(640, 480), QSize(400, 300)))

        handler.on_resize.assert_called_once_with(640, 480)

    def test_paint_draws_through_controller(self, surface, target_image, small_mask):
        controller = SpotlightController(target_image, small_mask)
        surface.set_handler(controller)

        rgba = qimage_to_rgba(surface.grab().toImage())

        # 未按下时整屏遮挡
        assert (rgba[:, :, :3] == 0).all()

    def test_paint_without_handler(self, surface):
        surface.grab()


class TestFindMeWindow:
    """FindMeWindow 测试"""

    def test_builds_controller_from_config(self, qtbot):
        window = FindMeWindow(GameConfig(target_size=64, spotlight_radius=40, random_seed=3))
        qtbot.addWidget(window)

        controller = window.controller
        assert controller.state is GameState.IDLE
        assert controller.placement.width == 64
        assert controller.pattern.width == 80
        assert window.statusBar().currentMessage() == STATUS_MESSAGES[GameState.IDLE]

    def test_missing_asset_falls_back_to_default(self, qtbot, tmp_path):
        config = GameConfig(target_image_path=str(tmp_path / "missing.png"), target_size=50)

        window = FindMeWindow(config)
        qtbot.addWidget(window)

        assert window.controller.placement.width == 50

    def test_status_follows_state(self, qtbot):
        window = FindMeWindow(GameConfig(random_seed=1))
        qtbot.addWidget(window)

        with qtbot.waitSignal(window.state_changed) as blocker:
            window.controller.on_pointer_event(PointerAction.DOWN, 5, 5)

        assert blocker.args == [GameState.REVEALING]
        assert window.statusBar().currentMessage() == STATUS_MESSAGES[GameState.REVEALING]

    def test_win_message(self, qtbot):
        window = FindMeWindow(GameConfig(random_seed=1))
        qtbot.addWidget(window)
        placement = window.controller.placement

        window.controller.on_pointer_event(PointerAction.DOWN, placement.x, placement.y)
        window.controller.on_pointer_event(PointerAction.UP, placement.x, placement.y)

        assert window.statusBar().currentMessage() == STATUS_MESSAGES[GameState.WON]
