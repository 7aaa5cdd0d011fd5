# =====================================================
# =============== 遮罩渲染器 ===============
# =====================================================

"""
遮罩渲染器 - 由遮罩图像生成聚光灯覆盖图案

覆盖图案与遮罩同尺寸：遮罩有覆盖的地方透明，其余为不透明黑色。
移动聚光灯时不重新计算图案，只改变绘制时的原点偏移；
图案以外的区域按边缘像素向外延伸（clamp），不平铺也不镜像。
"""

import math
from dataclasses import dataclass, field, replace
from typing import Union

from PySide6.QtCore import QRect, QRectF
from PySide6.QtGui import QColor, QImage, QPainter

from find_me.core.async_logger import async_debug_log
from find_me.core.image_utils import alpha_coverage


@dataclass(frozen=True)
class PatternOrigin:
    """图案原点偏移（绘制时采样的平移量）"""
    x: float = 0.0
    y: float = 0.0


@dataclass(frozen=True)
class RevealPattern:
    """聚光灯覆盖图案

    image 构建后不再修改；origin 通过 MaskRenderer.set_origin 生成新值。
    """
    image: QImage
    origin: PatternOrigin = field(default_factory=PatternOrigin)

    @property
    def width(self) -> int:
        return self.image.width()

    @property
    def height(self) -> int:
        return self.image.height()


class MaskRenderer:
    """聚光灯图案的构建、定位和绘制"""

    @staticmethod
    def build(mask: QImage) -> RevealPattern:
        """由遮罩构建覆盖图案

        先整体填充不透明黑色，再以 DestinationOut 模式叠加遮罩：
        遮罩 alpha 越高，目标像素被抠掉得越多。

        Args:
            mask: 遮罩图像，alpha 通道决定聚光灯形状

        Returns:
            原点为 (0, 0) 的覆盖图案
        """
        image = QImage(mask.size(), QImage.Format.Format_ARGB32_Premultiplied)
        image.fill(QColor(0, 0, 0, 255))

        painter = QPainter(image)
        painter.setCompositionMode(QPainter.CompositionMode.CompositionMode_DestinationOut)
        painter.drawImage(0, 0, mask)
        painter.end()

        async_debug_log(
            f"覆盖图案已构建: {image.width()}x{image.height()}, "
            f"遮罩覆盖率 {alpha_coverage(mask):.1%}",
            "RENDER"
        )
        return RevealPattern(image=image)

    @staticmethod
    def set_origin(pattern: RevealPattern, x: float, y: float) -> RevealPattern:
        """返回原点移动到 (x, y) 的图案，图像本身共享不复制"""
        return replace(pattern, origin=PatternOrigin(float(x), float(y)))

    @staticmethod
    def centered_origin(pattern: RevealPattern, x: float, y: float) -> RevealPattern:
        """让图案中心对准 (x, y)"""
        return MaskRenderer.set_origin(
            pattern,
            x - pattern.width / 2.0,
            y - pattern.height / 2.0,
        )

    @staticmethod
    def paint_over(painter: QPainter, rect: Union[QRect, QRectF], pattern: RevealPattern):
        """用图案填充 rect

        画面按 3x3 切分：中间是图案本体，四边拉伸边缘的一行/一列像素，
        四角拉伸角上的单个像素，即 clamp 平铺。

        Args:
            painter: 目标画布的 QPainter
            rect: 填充区域
            pattern: 覆盖图案（含原点偏移）
        """
        image = pattern.image
        if image.isNull():
            return

        area = QRectF(rect)
        w = float(image.width())
        h = float(image.height())
        # 原点对齐到整像素，相邻切块共用同一条整数边界，避免漏出 1 像素缝
        ox = float(math.floor(pattern.origin.x))
        oy = float(math.floor(pattern.origin.y))

        # (目标起点, 目标终点, 源起点, 源长度)
        columns = (
            (area.left(), min(ox, area.right()), 0.0, 1.0),
            (ox, ox + w, 0.0, w),
            (max(ox + w, area.left()), area.right(), w - 1.0, 1.0),
        )
        rows = (
            (area.top(), min(oy, area.bottom()), 0.0, 1.0),
            (oy, oy + h, 0.0, h),
            (max(oy + h, area.top()), area.bottom(), h - 1.0, 1.0),
        )

        painter.save()
        painter.setClipRect(area)
        painter.setRenderHint(QPainter.RenderHint.SmoothPixmapTransform, False)
        painter.setCompositionMode(QPainter.CompositionMode.CompositionMode_SourceOver)

        for x0, x1, sx, sw in columns:
            if x1 <= x0:
                continue
            for y0, y1, sy, sh in rows:
                if y1 <= y0:
                    continue
                painter.drawImage(
                    QRectF(x0, y0, x1 - x0, y1 - y0),
                    image,
                    QRectF(sx, sy, sw, sh),
                )

        painter.restore()
