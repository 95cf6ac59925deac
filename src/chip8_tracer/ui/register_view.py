# src/chip8_tracer/ui/register_view.py
"""
レジスタとフラグを表示するウィジェット。
Chip8Cpuのレイアウト情報を利用して動的にUIを構築します。
"""
from typing import Dict, Optional
from PySide6.QtWidgets import QWidget, QVBoxLayout, QFormLayout, QLabel, QGroupBox, QGridLayout
from PySide6.QtCore import Qt

from chip8_tracer.core.cpu import Chip8Cpu
from chip8_tracer.ui.fonts import get_monospace_font_family

# @intent:responsibility CPUのレジスタ値とフラグ状態を表示するUIウィジェットを提供します。
class RegisterView(QWidget):
    def __init__(self, parent=None):
        super().__init__(parent)
        self.setStyleSheet("background-color: #121212; color: #BBBBBB;")

        self._layout = QVBoxLayout(self)
        self._layout.setContentsMargins(5, 5, 5, 5)

        self._font_family = get_monospace_font_family()
        self._register_labels: Dict[str, QLabel] = {}
        self._register_widths: Dict[str, int] = {}
        self._flag_labels: Dict[str, QLabel] = {}
        self._cpu: Optional[Chip8Cpu] = None

    # @intent:responsibility 表示対象のCPUを設定し、UIレイアウトを構築します。
    def set_cpu(self, cpu: Chip8Cpu) -> None:
        self._cpu = cpu
        self._setup_ui()
        self.update_registers()

    def _setup_ui(self):
        while self._layout.count():
            item = self._layout.takeAt(0)
            if item.widget():
                item.widget().deleteLater()
        self._register_labels.clear()
        self._register_widths.clear()
        self._flag_labels.clear()

        for group in self._cpu.get_register_layout():
            group_box = QGroupBox(group.group_name)
            # 汎用レジスタは16個あるため2列のグリッドに並べる
            if len(group.registers) > 8:
                group_layout = QGridLayout(group_box)
                for idx, reg in enumerate(group.registers):
                    name_label, value_label = self._make_labels(reg.name, reg.width)
                    row, col = idx % 8, (idx // 8) * 2
                    group_layout.addWidget(name_label, row, col)
                    group_layout.addWidget(value_label, row, col + 1)
            else:
                group_layout = QFormLayout(group_box)
                group_layout.setLabelAlignment(Qt.AlignLeft)
                for reg in group.registers:
                    group_layout.addRow(*self._make_labels(reg.name, reg.width))
            self._layout.addWidget(group_box)

        flag_box = QGroupBox("Flags")
        flag_layout = QFormLayout(flag_box)
        for name in self._cpu.get_flag_state():
            value_label = QLabel("0")
            value_label.setStyleSheet(f"font-family: '{self._font_family}', monospace;")
            flag_layout.addRow(QLabel(f"{name}:"), value_label)
            self._flag_labels[name] = value_label
        self._layout.addWidget(flag_box)

        self._layout.addStretch()

    def _make_labels(self, name: str, width: int):
        hex_width = (width + 3) // 4 # 16bit -> 4chars, 8bit -> 2chars
        self._register_widths[name] = hex_width

        label_name = QLabel(f"{name}:")
        label_name.setStyleSheet("font-weight: bold; color: #BBBBBB;")

        label_value = QLabel(f"0x{'0' * hex_width}")
        label_value.setStyleSheet(f"font-family: '{self._font_family}', monospace; color: #FFD700;")
        label_value.setAlignment(Qt.AlignRight)

        self._register_labels[name] = label_value
        return label_name, label_value

    # @intent:responsibility 現在のCPU状態を取得し、表示値を更新します。
    def update_registers(self):
        if not self._cpu:
            return

        for name, value in self._cpu.get_register_map().items():
            if name in self._register_labels:
                width = self._register_widths[name]
                self._register_labels[name].setText(f"0x{value:0{width}X}")

        for name, value in self._cpu.get_flag_state().items():
            if name in self._flag_labels:
                label = self._flag_labels[name]
                label.setText("1" if value else "0")
                label.setStyleSheet(
                    f"font-family: '{self._font_family}', monospace; color: {'#00FF00' if value else '#555555'};"
                )

    def register_text(self, name: str) -> str:
        return self._register_labels[name].text()
