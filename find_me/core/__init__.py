# =====================================================
# =============== 核心模块 ===============
# =====================================================

"""
核心模块 - 包含配置管理、遮罩渲染、聚光灯控制器等核心功能
"""

from .config_manager import ConfigManager, GameConfig
from .mask_renderer import MaskRenderer, PatternOrigin, RevealPattern
from .spotlight_controller import GameState, SpotlightController, TargetPlacement
from .surface_handler import PointerAction, SurfaceHandler

__all__ = [
    "ConfigManager",
    "GameConfig",
    "MaskRenderer",
    "PatternOrigin",
    "RevealPattern",
    "GameState",
    "SpotlightController",
    "TargetPlacement",
    "PointerAction",
    "SurfaceHandler",
]
