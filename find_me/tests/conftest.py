# -*- coding: utf-8 -*-
"""
测试公共配置

Qt 使用离屏平台；调试日志关闭，避免测试写入用户目录。
"""

import os

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
os.environ["FIND_ME_DEBUG_ENABLED"] = "0"

import pytest
from PySide6.QtCore import Qt
from PySide6.QtGui import QColor, QImage


def solid_image(width: int, height: int, color) -> QImage:
    """生成纯色 ARGB 图像"""
    image = QImage(width, height, QImage.Format.Format_ARGB32_Premultiplied)
    image.fill(QColor(color))
    return image


@pytest.fixture
def target_image() -> QImage:
    """100x100 纯红目标"""
    return solid_image(100, 100, Qt.GlobalColor.red)


@pytest.fixture
def small_mask() -> QImage:
    """20x20 遮罩，中心 10x10 不透明，其余透明"""
    image = solid_image(20, 20, Qt.GlobalColor.transparent)
    for y in range(5, 15):
        for x in range(5, 15):
            image.setPixelColor(x, y, QColor(255, 255, 255, 255))
    return image


@pytest.fixture(scope="session", autouse=True)
def _qt_application(qapp):
    """QPainter 需要 QGuiApplication"""
    return qapp


@pytest.fixture
def make_image():
    """纯色图像工厂"""
    return solid_image
