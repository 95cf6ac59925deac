# src/chip8_tracer/ui/display_view.py
"""
CHIP-8の64x32フレームバッファを拡大表示するウィジェット。
"""
from PySide6.QtWidgets import QWidget, QSizePolicy
from PySide6.QtGui import QImage, QPainter, QColor
from PySide6.QtCore import Qt, QSize

from chip8_tracer.core.state import SCREEN_WIDTH, SCREEN_HEIGHT, SCREEN_SIZE

COLOR_LIT = QColor("#E0E0E0")
COLOR_UNLIT = QColor("#101010")

# @intent:responsibility フレームバッファ（1=点灯）を1セル1ピクセルのQImageに変換します。
def frame_buffer_to_image(frame: bytes) -> QImage:
    if len(frame) != SCREEN_SIZE:
        raise ValueError(f"Frame buffer must have {SCREEN_SIZE} cells, got {len(frame)}.")
    image = QImage(SCREEN_WIDTH, SCREEN_HEIGHT, QImage.Format_RGB32)
    lit = COLOR_LIT.rgb()
    unlit = COLOR_UNLIT.rgb()
    for y in range(SCREEN_HEIGHT):
        row = y * SCREEN_WIDTH
        for x in range(SCREEN_WIDTH):
            image.setPixel(x, y, lit if frame[row + x] else unlit)
    return image

# @intent:responsibility フレームバッファを指定倍率で描画するUIウィジェットを提供します。
class DisplayView(QWidget):
    def __init__(self, scale: int = 10, parent=None):
        super().__init__(parent)
        self._scale = scale
        self._image = frame_buffer_to_image(bytes(SCREEN_SIZE))
        self.setSizePolicy(QSizePolicy.Expanding, QSizePolicy.Expanding)
        self.setMinimumSize(SCREEN_WIDTH * 2, SCREEN_HEIGHT * 2)

    def set_scale(self, scale: int) -> None:
        self._scale = scale
        self.updateGeometry()

    def sizeHint(self) -> QSize:
        return QSize(SCREEN_WIDTH * self._scale, SCREEN_HEIGHT * self._scale)

    # @intent:responsibility 新しいフレームを受け取り、再描画を要求します。
    def update_frame(self, frame: bytes) -> None:
        self._image = frame_buffer_to_image(frame)
        self.update()

    def current_image(self) -> QImage:
        return self._image

    def paintEvent(self, event):
        painter = QPainter(self)
        painter.fillRect(self.rect(), COLOR_UNLIT)
        # アスペクト比(2:1)を保って中央に配置
        scaled = QSize(SCREEN_WIDTH, SCREEN_HEIGHT).scaled(self.size(), Qt.KeepAspectRatio)
        x = (self.width() - scaled.width()) // 2
        y = (self.height() - scaled.height()) // 2
        painter.drawImage(self.rect().adjusted(x, y, -x, -y), self._image)
        painter.end()
