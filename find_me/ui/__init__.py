# =====================================================
# =============== UI模块 ===============
# =====================================================

"""
UI模块 - 宿主窗口与画布

包含:
- spotlight_surface: 通用画布，转发绘制/指针/尺寸回调
- main_window: 游戏主窗口
"""

from .spotlight_surface import SpotlightSurface
from .main_window import FindMeWindow

__all__ = [
    "SpotlightSurface",
    "FindMeWindow",
]
