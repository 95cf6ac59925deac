# tests/instructions/test_load_instructions.py
"""
ロード/ストア、タイマー、キー入力、画面命令の単体テスト。
"""
import unittest

from chip8_tracer.core.state import create_initial_state, SCREEN_SIZE
from chip8_tracer.instructions import decode_opcode, execute_instruction
from chip8_tracer.instructions.base import Environment
from chip8_tracer.transport.memory import MemoryAccessType

class InstructionTestCase(unittest.TestCase):
    def setUp(self):
        self.state = create_initial_state()
        self.env = Environment()

    def _execute(self, opcode: int):
        self.state.pc += 2
        execute_instruction(decode_opcode(opcode), self.state, self.env)

class TestLoadInstructions(InstructionTestCase):
    def test_ld_imm_and_reg(self):
        self._execute(0x6A42)
        self.assertEqual(self.state.v[0xA], 0x42)
        self._execute(0x8BA0)
        self.assertEqual(self.state.v[0xB], 0x42)

    def test_ld_i(self):
        self._execute(0xA123)
        self.assertEqual(self.state.i, 0x123)

    def test_timers(self):
        self.state.v[1] = 0x3C
        self._execute(0xF115)
        self._execute(0xF118)
        self.assertEqual(self.state.delay_timer, 0x3C)
        self.assertEqual(self.state.sound_timer, 0x3C)

        self.state.delay_timer = 0x10
        self._execute(0xF207)
        self.assertEqual(self.state.v[2], 0x10)

    def test_font_address_uses_low_nibble(self):
        self.state.v[0] = 0x0A
        self._execute(0xF029)
        self.assertEqual(self.state.i, 50)
        self.state.v[0] = 0x1A
        self._execute(0xF029)
        self.assertEqual(self.state.i, 50)

    # @intent:test_case_bcd 156 が memory[I..I+2] に 1, 5, 6 として格納されることを検証します。
    def test_bcd(self):
        self.state.i = 0x300
        self.state.v[4] = 156
        self._execute(0xF433)
        self.assertEqual([self.state.memory[a] for a in range(0x300, 0x303)], [1, 5, 6])
        self.assertEqual(self.state.i, 0x300)

        self.state.v[4] = 7
        self._execute(0xF433)
        self.assertEqual([self.state.memory[a] for a in range(0x300, 0x303)], [0, 0, 7])

    def test_bcd_writes_are_logged(self):
        self.state.i = 0x300
        self.state.v[4] = 255
        self._execute(0xF433)
        writes = [a for a in self.state.memory.get_and_clear_activity_log() if a.access_type == MemoryAccessType.WRITE]
        self.assertEqual([(a.address, a.data) for a in writes], [(0x300, 2), (0x301, 5), (0x302, 5)])

    def test_store_and_restore_inclusive(self):
        self.state.i = 0x400
        for n in range(16):
            self.state.v[n] = 0x10 + n
        self._execute(0xF355)
        self.assertEqual([self.state.memory[a] for a in range(0x400, 0x405)], [0x10, 0x11, 0x12, 0x13, 0])
        self.assertEqual(self.state.i, 0x400)

        self.state.v = [0] * 16
        self._execute(0xF265)
        self.assertEqual(self.state.v[0:4], [0x10, 0x11, 0x12, 0])
        self.assertEqual(self.state.i, 0x400)

    def test_store_wraps_past_end_of_memory(self):
        self.state.i = 0xFFE
        self.state.v[0:4] = [1, 2, 3, 4]
        self._execute(0xF355)
        self.assertEqual(self.state.memory[0xFFE], 1)
        self.assertEqual(self.state.memory[0xFFF], 2)
        self.assertEqual(self.state.memory[0x000], 3)
        self.assertEqual(self.state.memory[0x001], 4)

    def test_bcd_wraps_past_end_of_memory(self):
        self.state.i = 0xFFE
        self.state.v[4] = 156
        self._execute(0xF433)
        self.assertEqual(self.state.memory[0xFFE], 1)
        self.assertEqual(self.state.memory[0xFFF], 5)
        self.assertEqual(self.state.memory[0x000], 6)
        self.assertEqual(self.state.i, 0xFFE)

    def test_restore_wraps_past_end_of_memory(self):
        self.state.i = 0xFFF
        self.state.memory[0xFFF] = 0x42
        self._execute(0xF165)
        self.assertEqual(self.state.v[0], 0x42)
        self.assertEqual(self.state.v[1], 0xF0) # memory[0x000] はフォント先頭
        self.assertEqual(self.state.i, 0xFFF)

class TestKeypadAndDisplayInstructions(InstructionTestCase):
    def test_skp_and_sknp(self):
        self.state.v[0] = 0x13 # 下位ニブルのみがキー番号
        self.state.keys[3] = True
        self._execute(0xE09E)
        self.assertEqual(self.state.pc, 0x204)

        self.state.pc = 0x200
        self._execute(0xE0A1)
        self.assertEqual(self.state.pc, 0x202)

        self.state.keys[3] = False
        self.state.pc = 0x200
        self._execute(0xE0A1)
        self.assertEqual(self.state.pc, 0x204)

    def test_ld_key_stalls_without_input(self):
        self._execute(0xF20A)
        self.assertTrue(self.state.waiting_for_key)
        self.assertEqual(self.state.pc, 0x200)

    def test_cls(self):
        self.state.frame_buffer[:] = bytes([1]) * SCREEN_SIZE
        self._execute(0x00E0)
        self.assertEqual(bytes(self.state.frame_buffer), bytes(SCREEN_SIZE))

    def test_drw_uses_register_coordinates(self):
        self.state.i = 0x300
        self.state.memory[0x300] = 0x80
        self.state.v[1] = 10
        self.state.v[2] = 3
        self._execute(0xD121)
        self.assertEqual(self.state.frame_buffer[3 * 64 + 10], 1)
        self.assertEqual(self.state.vf, 0)

if __name__ == '__main__':
    unittest.main()
