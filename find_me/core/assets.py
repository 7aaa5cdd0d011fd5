# =====================================================
# =============== 图像资源 ===============
# =====================================================

"""
图像资源 - 目标图像与聚光灯遮罩

配置中给出路径时从文件读取，否则用 QPainter 现场绘制内置图像。
"""

import os
from typing import Tuple

from PySide6.QtCore import QPointF, QRectF, Qt
from PySide6.QtGui import QColor, QImage, QPainter, QRadialGradient

from find_me.core.async_logger import async_debug_log
from find_me.core.config_manager import GameConfig
from find_me.core.error_logger import AssetLoadError


def load_image(path: str) -> QImage:
    """从文件加载图像

    Raises:
        AssetLoadError: 文件不存在或无法解码
    """
    if not os.path.isfile(path):
        raise AssetLoadError(path, "文件不存在")

    image = QImage(path)
    if image.isNull():
        raise AssetLoadError(path, "无法解码")
    return image


def create_default_target(size: int = 100) -> QImage:
    """绘制内置目标图像：绿色圆角方块加两只眼睛"""
    image = QImage(size, size, QImage.Format.Format_ARGB32_Premultiplied)
    image.fill(Qt.GlobalColor.transparent)

    painter = QPainter(image)
    painter.setRenderHint(QPainter.RenderHint.Antialiasing)
    painter.setPen(Qt.PenStyle.NoPen)

    painter.setBrush(QColor("#3DDC84"))
    margin = size * 0.05
    painter.drawRoundedRect(
        QRectF(margin, margin, size - 2 * margin, size - 2 * margin),
        size * 0.2, size * 0.2
    )

    painter.setBrush(QColor(Qt.GlobalColor.white))
    eye = size * 0.09
    painter.drawEllipse(QPointF(size * 0.33, size * 0.4), eye, eye)
    painter.drawEllipse(QPointF(size * 0.67, size * 0.4), eye, eye)

    painter.end()
    return image


def create_default_mask(radius: int = 150) -> QImage:
    """绘制内置遮罩：边缘柔化的圆形，边长 2 * radius"""
    size = radius * 2
    image = QImage(size, size, QImage.Format.Format_ARGB32_Premultiplied)
    image.fill(Qt.GlobalColor.transparent)

    gradient = QRadialGradient(QPointF(radius, radius), radius)
    gradient.setColorAt(0.0, QColor(255, 255, 255, 255))
    gradient.setColorAt(0.8, QColor(255, 255, 255, 255))
    gradient.setColorAt(1.0, QColor(255, 255, 255, 0))

    painter = QPainter(image)
    painter.setRenderHint(QPainter.RenderHint.Antialiasing)
    painter.setPen(Qt.PenStyle.NoPen)
    painter.setBrush(gradient)
    painter.drawEllipse(QPointF(radius, radius), radius, radius)
    painter.end()
    return image


def load_game_assets(config: GameConfig) -> Tuple[QImage, QImage]:
    """按配置加载 (目标, 遮罩)，加载失败时回退到内置图像"""
    target = None
    mask = None

    if config.target_image_path:
        try:
            target = load_image(config.target_image_path)
        except AssetLoadError as e:
            async_debug_log(f"{e}，使用内置目标图像", "ASSET")

    if config.mask_image_path:
        try:
            mask = load_image(config.mask_image_path)
        except AssetLoadError as e:
            async_debug_log(f"{e}，使用内置遮罩", "ASSET")

    if target is None:
        target = create_default_target(config.target_size)
    if mask is None:
        mask = create_default_mask(config.spotlight_radius)

    return target, mask
