# tests/core/test_sprite.py
"""
スプライトエンジン (Dxyn) の単体テスト。
"""
import unittest

from chip8_tracer.core.sprite import draw_sprite
from chip8_tracer.core.state import create_initial_state, SCREEN_WIDTH, SCREEN_SIZE

def cell(state, x, y):
    return state.frame_buffer[y * SCREEN_WIDTH + x]

class TestDrawSprite(unittest.TestCase):
    def setUp(self):
        self.state = create_initial_state()
        self.state.i = 0x300

    def _sprite(self, *rows):
        for offset, row in enumerate(rows):
            self.state.memory[0x300 + offset] = row

    def test_single_pixel(self):
        self._sprite(0x80)
        collided = draw_sprite(self.state, 0, 0, 1)
        self.assertFalse(collided)
        self.assertEqual(cell(self.state, 0, 0), 1)
        self.assertEqual(sum(self.state.frame_buffer), 1)
        self.assertEqual(self.state.vf, 0)
        self.assertEqual(self.state.i, 0x300) # Iは進まない

    def test_draw_twice_restores_screen(self):
        self._sprite(0x3C, 0x42, 0x81)
        self.state.frame_buffer[5 * SCREEN_WIDTH + 12] = 1
        before = bytes(self.state.frame_buffer)

        draw_sprite(self.state, 10, 4, 3)
        self.assertNotEqual(bytes(self.state.frame_buffer), before)
        draw_sprite(self.state, 10, 4, 3)

        self.assertEqual(bytes(self.state.frame_buffer), before)
        self.assertEqual(self.state.vf, 1)

    def test_full_row_collision_turns_row_off(self):
        self._sprite(0xFF)
        for x in range(8):
            self.state.frame_buffer[x] = 1
        draw_sprite(self.state, 0, 0, 1)
        self.assertEqual(self.state.vf, 1)
        self.assertEqual(sum(self.state.frame_buffer[0:8]), 0)

    def test_collision_accumulates_across_rows(self):
        # 1行目だけが衝突し、2行目は衝突しない
        self._sprite(0x80, 0x80)
        self.state.frame_buffer[0] = 1
        draw_sprite(self.state, 0, 0, 2)
        self.assertEqual(self.state.vf, 1)
        self.assertEqual(cell(self.state, 0, 1), 1)

    def test_vf_cleared_when_no_collision(self):
        self._sprite(0x80)
        self.state.vf = 1
        draw_sprite(self.state, 3, 3, 1)
        self.assertEqual(self.state.vf, 0)

    def test_clips_at_right_edge(self):
        self._sprite(0xFF)
        draw_sprite(self.state, 60, 0, 1)
        self.assertEqual([cell(self.state, x, 0) for x in range(60, 64)], [1, 1, 1, 1])
        self.assertEqual([cell(self.state, x, 0) for x in range(0, 4)], [0, 0, 0, 0])
        self.assertEqual([cell(self.state, x, 1) for x in range(0, 4)], [0, 0, 0, 0])
        self.assertEqual(sum(self.state.frame_buffer), 4)

    def test_clips_at_bottom_edge(self):
        self._sprite(0x80, 0x80, 0x80)
        draw_sprite(self.state, 0, 31, 3)
        self.assertEqual(cell(self.state, 0, 31), 1)
        self.assertEqual(cell(self.state, 0, 0), 0)
        self.assertEqual(sum(self.state.frame_buffer), 1)

    def test_origin_wraps(self):
        self._sprite(0x80)
        draw_sprite(self.state, 64 + 2, 32 + 1, 1)
        self.assertEqual(cell(self.state, 2, 1), 1)

    # @intent:test_case_sprite_read_wrap Iが0xFFF付近でも、スプライトの読み出しは4096でラップすることを検証します。
    def test_sprite_rows_wrap_past_end_of_memory(self):
        self.state.i = 0xFFF
        self.state.memory[0xFFF] = 0x80
        # 2行目は memory[0x000]（フォント"0"の先頭 0xF0）から読まれる
        collided = draw_sprite(self.state, 0, 0, 2)
        self.assertFalse(collided)
        self.assertEqual(cell(self.state, 0, 0), 1)
        self.assertEqual([cell(self.state, x, 1) for x in range(8)], [1, 1, 1, 1, 0, 0, 0, 0])
        self.assertEqual(sum(self.state.frame_buffer), 5)

    def test_zero_height_draws_nothing(self):
        self._sprite(0xFF)
        draw_sprite(self.state, 0, 0, 0)
        self.assertEqual(bytes(self.state.frame_buffer), bytes(SCREEN_SIZE))
        self.assertEqual(self.state.vf, 0)

if __name__ == '__main__':
    unittest.main()
