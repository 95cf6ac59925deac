"""
PC周辺の逆アセンブルコードを表示するウィジェット。
"""
from typing import List

from PySide6.QtWidgets import QWidget, QVBoxLayout, QTableWidget, QTableWidgetItem, QHeaderView
from PySide6.QtGui import QColor

from chip8_tracer.common.types import DisassemblyLine
from chip8_tracer.core.cpu import Chip8Cpu
from chip8_tracer.ui.fonts import get_monospace_font

COLOR_HIGHLIGHT = QColor("#404000")
COLOR_NORMAL = QColor("#101010")

# @intent:responsibility 逆アセンブルされたコードを表形式で表示し、現在のPCをハイライトします。
class CodeView(QWidget):
    def __init__(self, parent=None, lines_before: int = 8, lines_after: int = 24):
        super().__init__(parent)
        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)

        self.table = QTableWidget()
        self.table.setColumnCount(3)
        self.table.setHorizontalHeaderLabels(["Address", "Bytes", "Mnemonic"])
        self.table.horizontalHeader().setSectionResizeMode(0, QHeaderView.ResizeToContents)
        self.table.horizontalHeader().setSectionResizeMode(1, QHeaderView.ResizeToContents)
        self.table.horizontalHeader().setSectionResizeMode(2, QHeaderView.Stretch)
        self.table.setFont(get_monospace_font(10))
        self.table.verticalHeader().setVisible(False)
        self.table.setEditTriggers(QTableWidget.NoEditTriggers)
        self.table.setSelectionBehavior(QTableWidget.SelectRows)
        self.table.setShowGrid(False)
        self.table.setStyleSheet("background-color: #101010; color: #BBBBBB;")
        layout.addWidget(self.table)

        self._lines_before = lines_before
        self._lines_after = lines_after
        self.disassembled_data: List[DisassemblyLine] = []

    # @intent:responsibility PC周辺のメモリを逆アセンブルして表示を更新します。
    # @intent:rationale CHIP-8の命令は常に2バイトのため、PCと同じ偶奇のアドレスから逆アセンブルします。
    def update_code(self, cpu: Chip8Cpu, pc: int):
        start = max(pc - 2 * self._lines_before, pc & 1)
        length = 2 * (self._lines_before + self._lines_after)
        self.disassembled_data = cpu.disassemble(start, length)

        self.table.setRowCount(len(self.disassembled_data))
        for row, (address, hex_dump, mnemonic) in enumerate(self.disassembled_data):
            color = COLOR_HIGHLIGHT if address == pc else COLOR_NORMAL
            for col, text in enumerate((f"{address:03X}", hex_dump, mnemonic)):
                item = QTableWidgetItem(text)
                item.setBackground(color)
                self.table.setItem(row, col, item)
            if address == pc:
                self.table.scrollToItem(self.table.item(row, 0), QTableWidget.EnsureVisible)

    def reset_cache(self):
        self.disassembled_data = []
        self.table.setRowCount(0)
