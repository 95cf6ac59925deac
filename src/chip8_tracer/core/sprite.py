# chip8_tracer/core/sprite.py
"""
スプライトエンジン (Dxyn)

memory[I] から読み出したNバイトのスプライトをXOR合成でフレームバッファに描画し、
衝突（点灯していたピクセルが消灯したこと）をVFに報告します。
"""
from chip8_tracer.core.state import Chip8State, SCREEN_WIDTH, SCREEN_HEIGHT

# @intent:responsibility スプライトを描画し、衝突フラグをVFに設定します。
# @intent:pre-condition state.i がスプライトデータの先頭を指している必要があります（Iは進めません）。
# @intent:rationale 描画原点は画面サイズでラップしますが、各ピクセルはラップせず画面端でクリップします。
def draw_sprite(state: Chip8State, x0: int, y0: int, n: int) -> bool:
    """
    (x0, y0) に高さnのスプライトを描画します。

    Returns:
        いずれかのピクセルが点灯→消灯した場合はTrue。
    """
    origin_x = x0 & (SCREEN_WIDTH - 1)
    origin_y = y0 & (SCREEN_HEIGHT - 1)
    collision = False
    state.vf = 0

    for row in range(n & 0x0F):
        y = origin_y + row
        if y >= SCREEN_HEIGHT:
            break
        sprite_byte = state.memory.read(state.i + row)
        for col in range(8):
            x = origin_x + col
            if x >= SCREEN_WIDTH:
                break
            if (sprite_byte >> (7 - col)) & 1 == 0:
                continue
            index = y * SCREEN_WIDTH + x
            if state.frame_buffer[index]:
                collision = True
            state.frame_buffer[index] ^= 1

    state.vf = 1 if collision else 0
    return collision
