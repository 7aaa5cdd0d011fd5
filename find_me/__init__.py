# =====================================================
# =============== 找到我 ===============
# =====================================================

"""
找到我 - 聚光灯寻物小游戏

功能特性:
- 全屏遮挡，按下鼠标后出现跟随指针的聚光灯
- 聚光灯形状由遮罩图像决定
- 松开鼠标时检测聚光灯是否落在目标图像上

技术栈:
- Python + PySide6
"""

__version__ = "1.0.0"
__app_name__ = "找到我"
__author__ = "虎大王"

from .core.config_manager import (
    ConfigManager,
    GameConfig,
    get_user_data_dir,
)
from .core.mask_renderer import MaskRenderer, PatternOrigin, RevealPattern
from .core.spotlight_controller import GameState, SpotlightController, TargetPlacement
from .core.surface_handler import PointerAction, SurfaceHandler

__all__ = [
    "ConfigManager",
    "GameConfig",
    "get_user_data_dir",
    "MaskRenderer",
    "PatternOrigin",
    "RevealPattern",
    "GameState",
    "SpotlightController",
    "TargetPlacement",
    "PointerAction",
    "SurfaceHandler",
]
