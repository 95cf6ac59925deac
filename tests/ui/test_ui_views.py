# tests/ui/test_ui_views.py
"""
UIウィジェット（画面、レジスタ、コードビュー、メインウィンドウ）のロジックを検証するテスト。
表示は行わず、QApplicationとoffscreenプラットフォームのみで動作します。
"""
import os

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest
from PySide6.QtWidgets import QApplication

from chip8_tracer.config.models import EmulatorConfig
from chip8_tracer.core.cpu import Chip8Cpu
from chip8_tracer.core.state import SCREEN_SIZE, SCREEN_WIDTH
from chip8_tracer.ui.app import resolve_config
from chip8_tracer.ui.code_view import CodeView
from chip8_tracer.ui.display_view import DisplayView, frame_buffer_to_image, COLOR_LIT, COLOR_UNLIT
from chip8_tracer.ui.main_window import MainWindow, KEY_MAP
from chip8_tracer.ui.register_view import RegisterView

# PySide6のテストにはQApplicationのインスタンスが必要
@pytest.fixture(scope="session")
def qapp():
    app = QApplication.instance()
    if app is None:
        app = QApplication([])
    yield app

class TestDisplayView:
    def test_frame_buffer_to_image(self, qapp):
        frame = bytearray(SCREEN_SIZE)
        frame[0] = 1
        frame[SCREEN_WIDTH + 5] = 1
        image = frame_buffer_to_image(bytes(frame))
        assert (image.width(), image.height()) == (64, 32)
        assert image.pixel(0, 0) == COLOR_LIT.rgb()
        assert image.pixel(5, 1) == COLOR_LIT.rgb()
        assert image.pixel(1, 0) == COLOR_UNLIT.rgb()

    def test_wrong_frame_size(self, qapp):
        with pytest.raises(ValueError):
            frame_buffer_to_image(bytes(10))

    def test_update_frame_and_scale(self, qapp):
        view = DisplayView(scale=4)
        assert view.sizeHint().width() == 256
        frame = bytearray(SCREEN_SIZE)
        frame[63] = 1
        view.update_frame(bytes(frame))
        assert view.current_image().pixel(63, 0) == COLOR_LIT.rgb()
        view.set_scale(2)
        assert view.sizeHint().height() == 64

class TestRegisterAndCodeView:
    def test_register_view_reflects_cpu(self, qapp):
        cpu = Chip8Cpu()
        cpu.load_program(bytes([0x6A, 0x42]))
        view = RegisterView()
        view.set_cpu(cpu)
        assert view.register_text("PC") == "0x0200"
        assert view.register_text("VA") == "0x00"

        cpu.step()
        view.update_registers()
        assert view.register_text("PC") == "0x0202"
        assert view.register_text("VA") == "0x42"

    def test_code_view_centers_on_pc(self, qapp):
        cpu = Chip8Cpu()
        cpu.load_program(bytes([0x60, 0x05, 0x12, 0x00]))
        view = CodeView(lines_before=2, lines_after=4)
        view.update_code(cpu, 0x202)
        addresses = [line[0] for line in view.disassembled_data]
        assert addresses[0] == 0x1FE
        assert 0x202 in addresses
        assert view.table.rowCount() == 6
        assert view.table.item(2, 2).text() == "JP $200"

        view.reset_cache()
        assert view.table.rowCount() == 0

class TestMainWindow:
    def test_step_and_reset(self, qapp, tmp_path):
        rom = tmp_path / "test.ch8"
        rom.write_bytes(bytes([0x60, 0x05, 0x12, 0x02]))
        window = MainWindow(EmulatorConfig(rom=str(rom)))

        window.step_action.trigger()
        assert window.cpu.get_state().v[0] == 0x05
        assert window.register_view.register_text("V0") == "0x05"

        window.step_back_action.trigger()
        assert window.cpu.get_state().v[0] == 0

        window.step_action.trigger()
        window.reset_action.trigger()
        assert window.cpu.get_state().pc == 0x200
        assert window.cpu.get_state().memory[0x200] == 0x60
        window.close()

    def test_run_frame_advances_machine(self, qapp, tmp_path):
        rom = tmp_path / "loop.ch8"
        rom.write_bytes(bytes([0x70, 0x01, 0x12, 0x00]))
        window = MainWindow(EmulatorConfig(rom=str(rom), cycles_per_frame=4))
        window._run_frame()
        assert window.cpu.get_state().v[0] == 2
        window.close()

    def test_key_map_covers_all_keys(self):
        assert sorted(KEY_MAP.values()) == list(range(16))

def test_resolve_config(tmp_path):
    assert resolve_config([]) == (EmulatorConfig(), ".")

    rom = tmp_path / "game.ch8"
    config, base_dir = resolve_config([str(rom)])
    assert config.rom == str(rom.resolve())

    yaml_path = tmp_path / "system.yaml"
    yaml_path.write_text("rom: game.ch8\nscale: 5\n")
    config, base_dir = resolve_config([str(yaml_path)])
    assert config.rom == "game.ch8"
    assert config.scale == 5
    assert base_dir == str(tmp_path)
