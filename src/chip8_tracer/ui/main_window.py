# src/chip8_tracer/ui/main_window.py
"""
メインウィンドウの実装。
画面表示、レジスタ/コードビュー、実行制御ツールバーを保持し、
60Hzのフレームタイマーで命令実行とタイマー減算を駆動します。
"""
import sys
from pathlib import Path
from typing import Dict, Optional

from PySide6.QtWidgets import (
    QMainWindow, QApplication, QDockWidget, QToolBar, QFileDialog, QMessageBox,
)
from PySide6.QtGui import QPalette, QColor, QAction, QCloseEvent, QKeyEvent
from PySide6.QtCore import Qt, QTimer, Slot

from chip8_tracer.config.builder import SystemBuilder
from chip8_tracer.config.loader import ConfigLoader
from chip8_tracer.config.models import EmulatorConfig
from chip8_tracer.loader.loader import RomLoader
from .code_view import CodeView
from .display_view import DisplayView
from .register_view import RegisterView

# @intent:map ホストキーボードからCHIP-8の16キーへの対応（左上4x4ブロック）。
KEY_MAP: Dict[str, int] = {
    "1": 0x1, "2": 0x2, "3": 0x3, "4": 0xC,
    "Q": 0x4, "W": 0x5, "E": 0x6, "R": 0xD,
    "A": 0x7, "S": 0x8, "D": 0x9, "F": 0xE,
    "Z": 0xA, "X": 0x0, "C": 0xB, "V": 0xF,
}

# @intent:responsibility アプリケーションのメインウィンドウを定義し、UIの主要なコンポーネントを組み立てます。
class MainWindow(QMainWindow):
    def __init__(self, config: Optional[EmulatorConfig] = None, base_dir: str = ".", parent=None):
        super().__init__(parent)
        self.setWindowTitle("CHIP-8 Core Tracer")
        self._config = config or EmulatorConfig()
        self._base_dir = base_dir

        self._frame_timer = QTimer(self)
        self._frame_timer.timeout.connect(self._run_frame)

        self._set_dark_theme()
        self._create_views()
        self._create_toolbar()
        self._create_menus()
        self._setup_backend(self._config, base_dir)

        self._update_ui_state(False)

    # @intent:responsibility 設定からCPUとデバッガを構築し、各ビューに接続します。
    def _setup_backend(self, config: EmulatorConfig, base_dir: str):
        self.cpu, self.debugger = SystemBuilder().build_system(config, base_dir)
        self._config = config
        self._frame_timer.setInterval(max(1, 1000 // config.timer_hz))
        self.display_view.set_scale(config.scale)
        self.register_view.set_cpu(self.cpu)
        self.code_view.reset_cache()
        self._refresh_views()

    def _create_views(self):
        self.display_view = DisplayView(self._config.scale)
        self.setCentralWidget(self.display_view)

        self.register_view = RegisterView()
        register_dock = QDockWidget("Registers", self)
        register_dock.setWidget(self.register_view)
        self.addDockWidget(Qt.RightDockWidgetArea, register_dock)

        self.code_view = CodeView()
        code_dock = QDockWidget("Disassembly", self)
        code_dock.setWidget(self.code_view)
        self.addDockWidget(Qt.LeftDockWidgetArea, code_dock)

    # @intent:responsibility 実行制御用のツールバーを作成します。
    def _create_toolbar(self):
        toolbar = QToolBar("Main Toolbar")
        self.addToolBar(toolbar)

        self.run_action = QAction("Run", self)
        self.run_action.triggered.connect(self._run_debugger)
        toolbar.addAction(self.run_action)

        self.stop_action = QAction("Stop", self)
        self.stop_action.triggered.connect(self._stop_debugger)
        toolbar.addAction(self.stop_action)

        self.step_action = QAction("Step", self)
        self.step_action.triggered.connect(self._step_debugger)
        toolbar.addAction(self.step_action)

        self.step_back_action = QAction("Step Back", self)
        self.step_back_action.triggered.connect(self._step_back_debugger)
        toolbar.addAction(self.step_back_action)

        self.reset_action = QAction("Reset", self)
        self.reset_action.triggered.connect(self._reset_machine)
        toolbar.addAction(self.reset_action)

    def _create_menus(self):
        file_menu = self.menuBar().addMenu("File")

        self.load_rom_action = QAction("Load ROM...", self)
        self.load_rom_action.setShortcut("Ctrl+O")
        self.load_rom_action.triggered.connect(self._load_rom_file)
        file_menu.addAction(self.load_rom_action)

        self.load_config_action = QAction("Load Config...", self)
        self.load_config_action.triggered.connect(self._load_config_file)
        file_menu.addAction(self.load_config_action)

    def _update_ui_state(self, is_running: bool):
        self.load_rom_action.setEnabled(not is_running)
        self.load_config_action.setEnabled(not is_running)
        self.run_action.setEnabled(not is_running)
        self.step_action.setEnabled(not is_running)
        self.step_back_action.setEnabled(not is_running)
        self.stop_action.setEnabled(is_running)

    def _refresh_views(self):
        state = self.cpu.get_state()
        self.display_view.update_frame(self.cpu.frame_buffer())
        self.register_view.update_registers()
        self.code_view.update_code(self.cpu, state.pc)
        status = "Waiting for key" if state.waiting_for_key else f"Instructions: {self.cpu.cycle_count}"
        self.statusBar().showMessage(status)

    # @intent:responsibility 1フレーム分の命令を実行し、タイマーを減算して画面を更新します。
    # @intent:rationale 命令実行とタイマー減算はどちらもGUIスレッド上のこの呼び出しで行われるため、ロックは不要です。
    @Slot()
    def _run_frame(self):
        hit = self.debugger.run_frame(self._config.cycles_per_frame)
        if hit:
            self._frame_timer.stop()
            self._update_ui_state(False)
            self._refresh_views()
        else:
            self.display_view.update_frame(self.cpu.frame_buffer())

    @Slot()
    def _run_debugger(self):
        self._update_ui_state(True)
        self._frame_timer.start()

    @Slot()
    def _stop_debugger(self):
        self._frame_timer.stop()
        self.debugger.stop()
        self._update_ui_state(False)
        self._refresh_views()

    @Slot()
    def _step_debugger(self):
        self.debugger.step_instruction()
        self._refresh_views()

    @Slot()
    def _step_back_debugger(self):
        self.debugger.step_back()
        self._refresh_views()

    # @intent:responsibility ハードリセットし、ロード済みのROMを再配置します。
    @Slot()
    def _reset_machine(self):
        self.cpu.restart()
        self.debugger.reset_history()
        self._refresh_views()

    @Slot()
    def _load_rom_file(self):
        file_name, _ = QFileDialog.getOpenFileName(self, "Open CHIP-8 ROM", "", "CHIP-8 ROMs (*.ch8 *.c8);;All Files (*)")
        if not file_name:
            return
        try:
            self.cpu.reset()
            RomLoader().load_rom(file_name, self.cpu, self._config.load_address)
            self.debugger.reset_history()
            self._refresh_views()
            self.statusBar().showMessage(f"Loaded {file_name}")
        except (OSError, ValueError) as e:
            QMessageBox.critical(self, "Error", f"Failed to load ROM: {e}")

    @Slot()
    def _load_config_file(self):
        file_name, _ = QFileDialog.getOpenFileName(self, "Open Config", "", "YAML Files (*.yaml *.yml);;All Files (*)")
        if not file_name:
            return
        try:
            config = ConfigLoader().load_from_file(file_name)
            self._setup_backend(config, str(Path(file_name).parent))
        except (OSError, ValueError) as e:
            QMessageBox.critical(self, "Error", f"Failed to load config: {e}")

    # @intent:responsibility キー押下/解放をCHIP-8のキーマトリクスへ反映します。
    def keyPressEvent(self, event: QKeyEvent):
        key = KEY_MAP.get(event.text().upper())
        if key is None or event.isAutoRepeat():
            super().keyPressEvent(event)
            return
        self.cpu.set_key(key, True)

    def keyReleaseEvent(self, event: QKeyEvent):
        key = KEY_MAP.get(event.text().upper())
        if key is None or event.isAutoRepeat():
            super().keyReleaseEvent(event)
            return
        self.cpu.set_key(key, False)

    def _set_dark_theme(self):
        dark_palette = QPalette()
        dark_palette.setColor(QPalette.Window, QColor(29, 29, 29))
        dark_palette.setColor(QPalette.WindowText, QColor(224, 224, 224))
        dark_palette.setColor(QPalette.Base, QColor(30, 30, 30))
        dark_palette.setColor(QPalette.Text, QColor(224, 224, 224))
        dark_palette.setColor(QPalette.Button, QColor(53, 53, 53))
        dark_palette.setColor(QPalette.ButtonText, QColor(224, 224, 224))
        dark_palette.setColor(QPalette.Highlight, QColor(42, 130, 218))
        QApplication.setPalette(dark_palette)

    def closeEvent(self, event: QCloseEvent):
        self._frame_timer.stop()
        self.debugger.stop()
        event.accept()


if __name__ == '__main__':
    app = QApplication(sys.argv)
    main_win = MainWindow()
    main_win.show()
    sys.exit(app.exec())
