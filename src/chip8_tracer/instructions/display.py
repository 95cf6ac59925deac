# chip8_tracer/instructions/display.py
"""
画面命令（消去、スプライト描画）の実装。
"""
from chip8_tracer.core.decoder import Fields
from chip8_tracer.core.snapshot import Operation
from chip8_tracer.core.sprite import draw_sprite
from chip8_tracer.core.state import Chip8State, SCREEN_SIZE
from .base import Environment, reg

# --- CLS (00E0) ---
def decode_cls(opcode: int, fields: Fields) -> Operation:
    return Operation(opcode, "CLS", [], fields)

def execute_cls(state: Chip8State, op: Operation, env: Environment) -> None:
    state.frame_buffer[:] = bytes(SCREEN_SIZE)

# --- DRW Vx, Vy, nibble (Dxyn) ---
def decode_drw(opcode: int, fields: Fields) -> Operation:
    return Operation(opcode, "DRW", [reg(fields.x), reg(fields.y), f"{fields.n:X}"], fields)

# @intent:responsibility (V[x], V[y]) に memory[I] からのnバイトスプライトを描画します。
def execute_drw(state: Chip8State, op: Operation, env: Environment) -> None:
    draw_sprite(state, state.v[op.fields.x], state.v[op.fields.y], op.fields.n)
