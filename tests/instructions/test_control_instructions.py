# tests/instructions/test_control_instructions.py
"""
制御命令（ジャンプ、サブルーチン、条件スキップ）と命令デコードの単体テスト。
"""
import pytest

from chip8_tracer.core.quirks import Quirks
from chip8_tracer.core.state import create_initial_state
from chip8_tracer.instructions import decode_opcode, dispatch_key, execute_instruction
from chip8_tracer.instructions.base import Environment
from chip8_tracer.core.decoder import decode

@pytest.fixture
def state():
    s = create_initial_state()
    s.pc = 0x202 # 0x200の命令をフェッチ済み
    return s

def execute(state, opcode, env=None):
    execute_instruction(decode_opcode(opcode), state, env or Environment())

class TestDecodeOpcode:
    @pytest.mark.parametrize("opcode, text", [
        (0x00E0, "CLS"),
        (0x00EE, "RET"),
        (0x0123, "SYS $123"),
        (0x1ABC, "JP $ABC"),
        (0x2300, "CALL $300"),
        (0x3A12, "SE VA, #$12"),
        (0x4A12, "SNE VA, #$12"),
        (0x5AB0, "SE VA, VB"),
        (0x9AB0, "SNE VA, VB"),
        (0xB300, "JP V0, $300"),
        (0xD125, "DRW V1, V2, 5"),
        (0xE19E, "SKP V1"),
        (0xE1A1, "SKNP V1"),
        (0xF10A, "LD V1, K"),
        (0xF129, "LD F, V1"),
        (0xF133, "LD B, V1"),
        (0xF155, "LD [I], V1"),
        (0xF165, "LD V1, [I]"),
    ])
    def test_mnemonics(self, opcode, text):
        assert decode_opcode(opcode).text() == text

    @pytest.mark.parametrize("opcode", [0x8008, 0x800F, 0xE000, 0xF0FF, 0x5121])
    def test_undefined_combinations_are_unknown(self, opcode):
        operation = decode_opcode(opcode)
        if opcode == 0x5121:
            # 5xyn は下位ニブルを見ない
            assert operation.mnemonic == "SE"
        else:
            assert operation.mnemonic == "UNKNOWN"
            assert operation.text() == f"UNKNOWN #${opcode:04X}"

    def test_dispatch_keys(self):
        assert dispatch_key(decode(0x00E0)) == (0x0, 0xE0)
        assert dispatch_key(decode(0x8AB4)) == (0x8, 0x4)
        assert dispatch_key(decode(0xF233)) == (0xF, 0x33)
        assert dispatch_key(decode(0x6A12)) == (0x6, None)

class TestControlInstructions:
    def test_sys_is_noop(self, state):
        before = state.copy()
        execute(state, 0x0123)
        assert state == before

    def test_jp(self, state):
        execute(state, 0x1ABC)
        assert state.pc == 0xABC

    def test_call_then_ret(self, state):
        execute(state, 0x2300)
        assert state.pc == 0x300
        assert state.sp == 1
        state.pc = 0x302
        execute(state, 0x00EE)
        assert state.pc == 0x202
        assert state.sp == 0

    @pytest.mark.parametrize("opcode, value, skipped", [
        (0x3A12, 0x12, True),
        (0x3A12, 0x13, False),
        (0x4A12, 0x12, False),
        (0x4A12, 0x13, True),
    ])
    def test_skip_immediate(self, state, opcode, value, skipped):
        state.v[0xA] = value
        execute(state, opcode)
        assert state.pc == (0x204 if skipped else 0x202)

    @pytest.mark.parametrize("opcode, vy, skipped", [
        (0x5AB0, 0x40, True),
        (0x5AB0, 0x41, False),
        (0x9AB0, 0x40, False),
        (0x9AB0, 0x41, True),
    ])
    def test_skip_register(self, state, opcode, vy, skipped):
        state.v[0xA] = 0x40
        state.v[0xB] = vy
        execute(state, opcode)
        assert state.pc == (0x204 if skipped else 0x202)

    def test_jp_offset_uses_v0(self, state):
        state.v[0] = 0x10
        state.v[3] = 0x20
        execute(state, 0xB300)
        assert state.pc == 0x310

    def test_jp_offset_quirk_uses_vx(self, state):
        state.v[0] = 0x10
        state.v[3] = 0x20
        execute(state, 0xB300, Environment(quirks=Quirks(jump_uses_vx=True)))
        assert state.pc == 0x320
