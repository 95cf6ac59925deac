# chip8_tracer/instructions/load.py
"""
ロード/ストア命令（レジスタ、インデックス、タイマー、BCD、メモリ退避/復帰）の実装。
"""
from chip8_tracer.core.decoder import Fields
from chip8_tracer.core.snapshot import Operation
from chip8_tracer.core.state import Chip8State, FONT_START, FONT_GLYPH_SIZE
from .base import Environment, reg, addr, imm

# --- LD Vx, byte (6xnn) ---
def decode_ld_imm(opcode: int, fields: Fields) -> Operation:
    return Operation(opcode, "LD", [reg(fields.x), imm(fields.nn)], fields)

def execute_ld_imm(state: Chip8State, op: Operation, env: Environment) -> None:
    state.v[op.fields.x] = op.fields.nn

# --- LD Vx, Vy (8xy0) ---
def decode_ld_reg(opcode: int, fields: Fields) -> Operation:
    return Operation(opcode, "LD", [reg(fields.x), reg(fields.y)], fields)

def execute_ld_reg(state: Chip8State, op: Operation, env: Environment) -> None:
    state.v[op.fields.x] = state.v[op.fields.y]

# --- LD I, addr (Annn) ---
def decode_ld_i(opcode: int, fields: Fields) -> Operation:
    return Operation(opcode, "LD", ["I", addr(fields.nnn)], fields)

def execute_ld_i(state: Chip8State, op: Operation, env: Environment) -> None:
    state.i = op.fields.nnn

# --- LD Vx, DT (Fx07) ---
def decode_ld_vx_dt(opcode: int, fields: Fields) -> Operation:
    return Operation(opcode, "LD", [reg(fields.x), "DT"], fields)

def execute_ld_vx_dt(state: Chip8State, op: Operation, env: Environment) -> None:
    state.v[op.fields.x] = state.delay_timer

# --- LD DT, Vx (Fx15) ---
def decode_ld_dt_vx(opcode: int, fields: Fields) -> Operation:
    return Operation(opcode, "LD", ["DT", reg(fields.x)], fields)

def execute_ld_dt_vx(state: Chip8State, op: Operation, env: Environment) -> None:
    state.delay_timer = state.v[op.fields.x]

# --- LD ST, Vx (Fx18) ---
def decode_ld_st_vx(opcode: int, fields: Fields) -> Operation:
    return Operation(opcode, "LD", ["ST", reg(fields.x)], fields)

def execute_ld_st_vx(state: Chip8State, op: Operation, env: Environment) -> None:
    state.sound_timer = state.v[op.fields.x]

# --- LD F, Vx (Fx29) ---
def decode_ld_font(opcode: int, fields: Fields) -> Operation:
    return Operation(opcode, "LD", ["F", reg(fields.x)], fields)

# @intent:responsibility V[x]の下位ニブルに対応する数字グリフの先頭アドレスをIに設定します。
def execute_ld_font(state: Chip8State, op: Operation, env: Environment) -> None:
    digit = state.v[op.fields.x] & 0x0F
    state.i = FONT_START + FONT_GLYPH_SIZE * digit

# --- LD B, Vx (Fx33) ---
def decode_ld_bcd(opcode: int, fields: Fields) -> Operation:
    return Operation(opcode, "LD", ["B", reg(fields.x)], fields)

# @intent:responsibility V[x]を百・十・一の位に分解し、memory[I..I+2]に格納します。
def execute_ld_bcd(state: Chip8State, op: Operation, env: Environment) -> None:
    value = state.v[op.fields.x]
    state.memory.write(state.i, value // 100)
    state.memory.write(state.i + 1, (value // 10) % 10)
    state.memory.write(state.i + 2, value % 10)

# --- LD [I], Vx (Fx55) ---
def decode_ld_store(opcode: int, fields: Fields) -> Operation:
    return Operation(opcode, "LD", ["[I]", reg(fields.x)], fields)

# @intent:responsibility V0..Vxをmemory[I]から順に退避します。Iは変化しません。
def execute_ld_store(state: Chip8State, op: Operation, env: Environment) -> None:
    for k in range(op.fields.x + 1):
        state.memory.write(state.i + k, state.v[k])

# --- LD Vx, [I] (Fx65) ---
def decode_ld_restore(opcode: int, fields: Fields) -> Operation:
    return Operation(opcode, "LD", [reg(fields.x), "[I]"], fields)

# @intent:responsibility memory[I]から順にV0..Vxへ復帰します。Iは変化しません。
def execute_ld_restore(state: Chip8State, op: Operation, env: Environment) -> None:
    for k in range(op.fields.x + 1):
        state.v[k] = state.memory.read(state.i + k)
