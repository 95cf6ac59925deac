# src/chip8_tracer/ui/fonts.py
"""
逆アセンブルやレジスタ表示に使う等幅フォントの取得。
"""
from PySide6.QtGui import QFont, QFontDatabase

# @intent:responsibility システム既定の等幅フォントを指定サイズで返します。
def get_monospace_font(size: int = 10) -> QFont:
    font = QFontDatabase.systemFont(QFontDatabase.FixedFont)
    font.setPointSize(size)
    return font

def get_monospace_font_family() -> str:
    return get_monospace_font().family()
