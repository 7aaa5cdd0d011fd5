# =====================================================
# =============== 图像工具 ===============
# =====================================================

"""
QImage 与 numpy 数组之间的转换工具
"""

import numpy as np
from PySide6.QtGui import QImage


def qimage_to_rgba(image: QImage) -> np.ndarray:
    """QImage 转 (height, width, 4) 的 RGBA uint8 数组（非预乘）"""
    rgba = image.convertToFormat(QImage.Format.Format_RGBA8888)

    width = rgba.width()
    height = rgba.height()
    bytes_per_line = rgba.bytesPerLine()

    arr = np.frombuffer(rgba.constBits(), dtype=np.uint8).reshape(height, bytes_per_line)

    # 裁剪到实际宽度（去除行尾填充），复制后与 QImage 内存解耦
    return arr[:, :width * 4].reshape(height, width, 4).copy()


def alpha_channel(image: QImage) -> np.ndarray:
    """取出 alpha 通道，形状 (height, width)"""
    return qimage_to_rgba(image)[:, :, 3]


def alpha_coverage(image: QImage) -> float:
    """图像的平均覆盖率（alpha 均值，0.0 ~ 1.0）"""
    if image.isNull() or image.width() == 0 or image.height() == 0:
        return 0.0
    return float(alpha_channel(image).mean()) / 255.0
