# chip8_tracer/instructions/control.py
"""
制御命令（ジャンプ、サブルーチン、条件スキップ）の実装。
"""
from chip8_tracer.core import stack
from chip8_tracer.core.decoder import Fields
from chip8_tracer.core.snapshot import Operation
from chip8_tracer.core.state import Chip8State
from .base import Environment, skip_next, reg, addr, imm

# --- SYS (0nnn) ---
# @intent:responsibility 0nnn (マシン語ルーチン呼び出し) をデコードします。
def decode_sys(opcode: int, fields: Fields) -> Operation:
    return Operation(opcode, "SYS", [addr(fields.nnn)], fields)

# @intent:responsibility 0nnnを実行します。ホストCPUのルーチンは存在しないため何もしません。
def execute_sys(state: Chip8State, op: Operation, env: Environment) -> None:
    # Intentional: no native routines to call
    pass

# --- RET (00EE) ---
def decode_ret(opcode: int, fields: Fields) -> Operation:
    return Operation(opcode, "RET", [], fields)

# @intent:responsibility スタックから戻りアドレスを取り出してPCに設定します。
# @intent:rationale スタックが空の場合はPCを変更しません（次の命令へ進むだけ）。
def execute_ret(state: Chip8State, op: Operation, env: Environment) -> None:
    return_addr = stack.pop(state)
    if return_addr is not None:
        state.pc = return_addr

# --- JP (1nnn) ---
def decode_jp(opcode: int, fields: Fields) -> Operation:
    return Operation(opcode, "JP", [addr(fields.nnn)], fields)

def execute_jp(state: Chip8State, op: Operation, env: Environment) -> None:
    state.pc = op.fields.nnn

# --- CALL (2nnn) ---
def decode_call(opcode: int, fields: Fields) -> Operation:
    return Operation(opcode, "CALL", [addr(fields.nnn)], fields)

# @intent:responsibility 戻りアドレス（既に次の命令を指しているPC）を積んでからジャンプします。
def execute_call(state: Chip8State, op: Operation, env: Environment) -> None:
    stack.push(state, state.pc)
    state.pc = op.fields.nnn

# --- SE Vx, byte (3xnn) ---
def decode_se_imm(opcode: int, fields: Fields) -> Operation:
    return Operation(opcode, "SE", [reg(fields.x), imm(fields.nn)], fields)

def execute_se_imm(state: Chip8State, op: Operation, env: Environment) -> None:
    if state.v[op.fields.x] == op.fields.nn:
        skip_next(state)

# --- SNE Vx, byte (4xnn) ---
def decode_sne_imm(opcode: int, fields: Fields) -> Operation:
    return Operation(opcode, "SNE", [reg(fields.x), imm(fields.nn)], fields)

def execute_sne_imm(state: Chip8State, op: Operation, env: Environment) -> None:
    if state.v[op.fields.x] != op.fields.nn:
        skip_next(state)

# --- SE Vx, Vy (5xy0) ---
def decode_se_reg(opcode: int, fields: Fields) -> Operation:
    return Operation(opcode, "SE", [reg(fields.x), reg(fields.y)], fields)

def execute_se_reg(state: Chip8State, op: Operation, env: Environment) -> None:
    if state.v[op.fields.x] == state.v[op.fields.y]:
        skip_next(state)

# --- SNE Vx, Vy (9xy0) ---
def decode_sne_reg(opcode: int, fields: Fields) -> Operation:
    return Operation(opcode, "SNE", [reg(fields.x), reg(fields.y)], fields)

def execute_sne_reg(state: Chip8State, op: Operation, env: Environment) -> None:
    if state.v[op.fields.x] != state.v[op.fields.y]:
        skip_next(state)

# --- JP V0, addr (Bnnn) ---
# @intent:responsibility Bnnn をデコードします。表示は既定（V0加算）の形式です。
def decode_jp_offset(opcode: int, fields: Fields) -> Operation:
    return Operation(opcode, "JP", [reg(0), addr(fields.nnn)], fields)

# @intent:responsibility nnn + V0 へジャンプします（Quirk有効時は V[x]）。
def execute_jp_offset(state: Chip8State, op: Operation, env: Environment) -> None:
    base_reg = op.fields.x if env.quirks.jump_uses_vx else 0
    state.pc = (op.fields.nnn + state.v[base_reg]) & 0xFFFF
