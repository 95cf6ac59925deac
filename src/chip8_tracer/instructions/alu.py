# chip8_tracer/instructions/alu.py
"""
算術論理演算命令の実装。

8ビット演算は全て256でラップします。VFに書き込むフラグは切り捨て前の値から求め、
結果の書き込み後に設定します（x == F の場合はフラグが残ります）。
"""
from chip8_tracer.core.decoder import Fields
from chip8_tracer.core.snapshot import Operation
from chip8_tracer.core.state import Chip8State
from .base import Environment, reg, imm

# --- ADD Vx, byte (7xnn) ---
def decode_add_imm(opcode: int, fields: Fields) -> Operation:
    return Operation(opcode, "ADD", [reg(fields.x), imm(fields.nn)], fields)

# @intent:responsibility V[x]に即値を加算します。キャリーは無視され、VFは変化しません。
def execute_add_imm(state: Chip8State, op: Operation, env: Environment) -> None:
    state.v[op.fields.x] = (state.v[op.fields.x] + op.fields.nn) & 0xFF

# --- OR / AND / XOR (8xy1-8xy3) ---
def decode_or(opcode: int, fields: Fields) -> Operation:
    return Operation(opcode, "OR", [reg(fields.x), reg(fields.y)], fields)

def execute_or(state: Chip8State, op: Operation, env: Environment) -> None:
    state.v[op.fields.x] |= state.v[op.fields.y]

def decode_and(opcode: int, fields: Fields) -> Operation:
    return Operation(opcode, "AND", [reg(fields.x), reg(fields.y)], fields)

def execute_and(state: Chip8State, op: Operation, env: Environment) -> None:
    state.v[op.fields.x] &= state.v[op.fields.y]

def decode_xor(opcode: int, fields: Fields) -> Operation:
    return Operation(opcode, "XOR", [reg(fields.x), reg(fields.y)], fields)

def execute_xor(state: Chip8State, op: Operation, env: Environment) -> None:
    state.v[op.fields.x] ^= state.v[op.fields.y]

# --- ADD Vx, Vy (8xy4) ---
def decode_add_reg(opcode: int, fields: Fields) -> Operation:
    return Operation(opcode, "ADD", [reg(fields.x), reg(fields.y)], fields)

# @intent:responsibility V[x] + V[y] を計算し、255を超えた場合にVF=1とします。
def execute_add_reg(state: Chip8State, op: Operation, env: Environment) -> None:
    total = state.v[op.fields.x] + state.v[op.fields.y]
    state.v[op.fields.x] = total & 0xFF
    state.vf = 1 if total > 0xFF else 0

# --- SUB Vx, Vy (8xy5) ---
def decode_sub(opcode: int, fields: Fields) -> Operation:
    return Operation(opcode, "SUB", [reg(fields.x), reg(fields.y)], fields)

# @intent:responsibility V[x] - V[y] を計算します。ボローが発生しない (V[x] >= V[y]) 場合にVF=1。
def execute_sub(state: Chip8State, op: Operation, env: Environment) -> None:
    vx = state.v[op.fields.x]
    vy = state.v[op.fields.y]
    state.v[op.fields.x] = (vx - vy) & 0xFF
    state.vf = 1 if vx >= vy else 0

# --- SUBN Vx, Vy (8xy7) ---
def decode_subn(opcode: int, fields: Fields) -> Operation:
    return Operation(opcode, "SUBN", [reg(fields.x), reg(fields.y)], fields)

def execute_subn(state: Chip8State, op: Operation, env: Environment) -> None:
    vx = state.v[op.fields.x]
    vy = state.v[op.fields.y]
    state.v[op.fields.x] = (vy - vx) & 0xFF
    state.vf = 1 if vy >= vx else 0

# --- SHR Vx {, Vy} (8xy6) ---
def decode_shr(opcode: int, fields: Fields) -> Operation:
    return Operation(opcode, "SHR", [reg(fields.x), reg(fields.y)], fields)

# @intent:responsibility V[y]を右シフトした値をV[x]に格納し、押し出されたビットをVFに設定します。
# @intent:rationale COSMAC VIPの挙動（V[y]を読む）が既定。shift_uses_vx が有効な場合のみV[x]を読みます。
def execute_shr(state: Chip8State, op: Operation, env: Environment) -> None:
    source = state.v[op.fields.x if env.quirks.shift_uses_vx else op.fields.y]
    state.v[op.fields.x] = source >> 1
    state.vf = source & 0x01

# --- SHL Vx {, Vy} (8xyE) ---
def decode_shl(opcode: int, fields: Fields) -> Operation:
    return Operation(opcode, "SHL", [reg(fields.x), reg(fields.y)], fields)

def execute_shl(state: Chip8State, op: Operation, env: Environment) -> None:
    source = state.v[op.fields.x if env.quirks.shift_uses_vx else op.fields.y]
    state.v[op.fields.x] = (source << 1) & 0xFF
    state.vf = (source & 0x80) >> 7

# --- ADD I, Vx (Fx1E) ---
def decode_add_i(opcode: int, fields: Fields) -> Operation:
    return Operation(opcode, "ADD", ["I", reg(fields.x)], fields)

# @intent:responsibility IにV[x]を加算し、0x0FFFを超えた場合にVF=1とします。
def execute_add_i(state: Chip8State, op: Operation, env: Environment) -> None:
    total = state.i + state.v[op.fields.x]
    state.i = total & 0xFFFF
    state.vf = 1 if total > 0x0FFF else 0

# --- RND Vx, byte (Cxnn) ---
def decode_rnd(opcode: int, fields: Fields) -> Operation:
    return Operation(opcode, "RND", [reg(fields.x), imm(fields.nn)], fields)

def execute_rnd(state: Chip8State, op: Operation, env: Environment) -> None:
    state.v[op.fields.x] = env.rng.randrange(0x100) & op.fields.nn
