# =====================================================
# =============== 配置管理器 ===============
# =====================================================

"""
配置管理器 - 负责游戏配置的读写和管理

配置只描述宿主窗口和资源，不保存任何对局状态。
"""

import json
import os
import re
import sys
from dataclasses import dataclass, asdict
from typing import Optional

from find_me.core.async_logger import async_debug_log


_HEX_COLOR_RE = re.compile(r"^#[0-9A-Fa-f]{6}$")


def _is_int(value) -> bool:
    """JSON 中的 true/false 也是 int，需要排除"""
    return isinstance(value, int) and not isinstance(value, bool)


def get_user_data_dir() -> str:
    """
    获取用户数据目录（固定为 ~/.find_me）

    如果目录不存在，会自动创建。

    Returns:
        用户数据目录的绝对路径
    """
    # Windows 上 os.path.expanduser("~") 可能返回错误路径（如 Documents）
    if sys.platform == "win32":
        home = os.environ.get("USERPROFILE", os.path.expanduser("~"))
    else:
        home = os.path.expanduser("~")

    path = os.path.join(home, ".find_me")
    os.makedirs(path, exist_ok=True)
    return path


def get_config_filename() -> str:
    """
    获取配置文件名

    Returns:
        配置文件名，固定为 config.json
    """
    return "config.json"


@dataclass
class GameConfig:
    """游戏配置

    窗口尺寸、颜色、资源路径和随机种子。
    """
    # 窗口
    window_width: int = 1000
    window_height: int = 800

    # 颜色
    background_color: str = "#FFFFFF"  # 清屏背景色
    cover_color: str = "#000000"       # 未按下时的整屏遮挡色

    # 资源（留空则使用内置图像）
    target_image_path: str = ""
    mask_image_path: str = ""

    # 内置图像参数
    target_size: int = 100             # 目标边长 (px)
    spotlight_radius: int = 150        # 聚光灯半径 (px)

    # 随机种子（None 表示每次启动随机）
    random_seed: Optional[int] = None

    # 参数范围
    MIN_WINDOW_SIZE = 200
    MAX_WINDOW_SIZE = 4000
    MIN_TARGET_SIZE = 16
    MAX_TARGET_SIZE = 512
    MIN_SPOTLIGHT_RADIUS = 20
    MAX_SPOTLIGHT_RADIUS = 500

    def __post_init__(self):
        """验证并规范化配置值"""
        if not _is_int(self.window_width):
            self.window_width = 1000
        else:
            self.window_width = max(self.MIN_WINDOW_SIZE, min(self.MAX_WINDOW_SIZE, self.window_width))

        if not _is_int(self.window_height):
            self.window_height = 800
        else:
            self.window_height = max(self.MIN_WINDOW_SIZE, min(self.MAX_WINDOW_SIZE, self.window_height))

        # 颜色必须是 #RRGGBB
        if not isinstance(self.background_color, str) or not _HEX_COLOR_RE.match(self.background_color):
            self.background_color = "#FFFFFF"
        if not isinstance(self.cover_color, str) or not _HEX_COLOR_RE.match(self.cover_color):
            self.cover_color = "#000000"

        if not isinstance(self.target_image_path, str):
            self.target_image_path = ""
        if not isinstance(self.mask_image_path, str):
            self.mask_image_path = ""

        if not _is_int(self.target_size):
            self.target_size = 100
        else:
            self.target_size = max(self.MIN_TARGET_SIZE, min(self.MAX_TARGET_SIZE, self.target_size))

        if not _is_int(self.spotlight_radius):
            self.spotlight_radius = 150
        else:
            self.spotlight_radius = max(self.MIN_SPOTLIGHT_RADIUS, min(self.MAX_SPOTLIGHT_RADIUS, self.spotlight_radius))

        if self.random_seed is not None and not _is_int(self.random_seed):
            self.random_seed = None

    def to_dict(self) -> dict:
        """转换为字典"""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> "GameConfig":
        """从字典创建配置对象，未知字段忽略，缺失字段取默认值"""
        config = cls()
        return cls(
            window_width=data.get("window_width", config.window_width),
            window_height=data.get("window_height", config.window_height),
            background_color=data.get("background_color", config.background_color),
            cover_color=data.get("cover_color", config.cover_color),
            target_image_path=data.get("target_image_path", config.target_image_path),
            mask_image_path=data.get("mask_image_path", config.mask_image_path),
            target_size=data.get("target_size", config.target_size),
            spotlight_radius=data.get("spotlight_radius", config.spotlight_radius),
            random_seed=data.get("random_seed", config.random_seed),
        )


class ConfigManager:
    """配置管理器"""

    def __init__(self, config_path: Optional[str] = None):
        """
        初始化配置管理器

        Args:
            config_path: 配置文件路径，默认 ~/.find_me/config.json
        """
        if config_path is None:
            config_path = os.path.join(get_user_data_dir(), get_config_filename())

        self.config_path = config_path
        self.config = GameConfig()

    def load(self) -> GameConfig:
        """
        加载配置文件

        Returns:
            GameConfig: 加载的配置对象
        """
        if not os.path.exists(self.config_path):
            # 配置文件不存在，使用默认配置
            self.config = GameConfig()
            return self.config

        try:
            with open(self.config_path, 'r', encoding='utf-8-sig') as f:
                data = json.load(f)
            if not isinstance(data, dict):
                raise ValueError("配置文件顶层必须是对象")
            self.config = GameConfig.from_dict(data)
        except (json.JSONDecodeError, ValueError, OSError) as e:
            # 配置文件损坏或无法读取，使用默认配置
            async_debug_log(f"加载配置文件失败: {e}", "CONFIG")
            self.config = GameConfig()

        return self.config

    def save(self) -> bool:
        """
        保存配置到文件

        Returns:
            bool: 是否保存成功
        """
        try:
            config_dir = os.path.dirname(self.config_path)
            if config_dir:
                os.makedirs(config_dir, exist_ok=True)

            with open(self.config_path, 'w', encoding='utf-8') as f:
                json.dump(self.config.to_dict(), f, ensure_ascii=False, indent=2)

            return True
        except OSError as e:
            async_debug_log(f"保存配置文件失败: {e}", "CONFIG")
            return False

    def reset_to_defaults(self):
        """重置为默认配置"""
        self.config = GameConfig()

    def get_config(self) -> GameConfig:
        """获取当前配置"""
        return self.config

    def set_config(self, config: GameConfig):
        """设置配置"""
        self.config = config
