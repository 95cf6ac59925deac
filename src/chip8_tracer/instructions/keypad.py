# chip8_tracer/instructions/keypad.py
"""
キー入力命令の実装。
"""
from chip8_tracer.core.decoder import Fields
from chip8_tracer.core.snapshot import Operation
from chip8_tracer.core.state import Chip8State, KEY_COUNT
from .base import Environment, skip_next, reg

# --- SKP Vx (Ex9E) ---
def decode_skp(opcode: int, fields: Fields) -> Operation:
    return Operation(opcode, "SKP", [reg(fields.x)], fields)

def execute_skp(state: Chip8State, op: Operation, env: Environment) -> None:
    if state.keys[state.v[op.fields.x] & 0x0F]:
        skip_next(state)

# --- SKNP Vx (ExA1) ---
def decode_sknp(opcode: int, fields: Fields) -> Operation:
    return Operation(opcode, "SKNP", [reg(fields.x)], fields)

def execute_sknp(state: Chip8State, op: Operation, env: Environment) -> None:
    if not state.keys[state.v[op.fields.x] & 0x0F]:
        skip_next(state)

# --- LD Vx, K (Fx0A) ---
def decode_ld_key(opcode: int, fields: Fields) -> Operation:
    return Operation(opcode, "LD", [reg(fields.x), "K"], fields)

# @intent:responsibility キーが新たに押されるまで命令を再実行させ、押されたキー番号をV[x]に格納します。
# @intent:rationale ループで待つと入力の更新（step呼び出しの合間に行われる）が届かずデッドロックするため、
#                  PCを2戻して次のstep呼び出しで同じ命令を再実行します。
def execute_ld_key(state: Chip8State, op: Operation, env: Environment) -> None:
    """
    待機開始時点で既に押されていたキーは対象外です。
    一度離してから押し直した場合は新たな押下として扱います。
    """
    if not state.waiting_for_key:
        state.waiting_for_key = True
        state.key_wait_held = list(state.keys)

    for key in range(KEY_COUNT):
        if not state.keys[key]:
            state.key_wait_held[key] = False
        elif not state.key_wait_held[key]:
            state.v[op.fields.x] = key
            state.waiting_for_key = False
            state.key_wait_held = [False] * KEY_COUNT
            return

    # 押下なし: この命令に留まる
    state.pc = (state.pc - 2) & 0xFFFF
