# chip8_tracer/core/stack.py
"""
Core Layer (スタック規律)

16段の戻りアドレススタックに対するプッシュ/ポップを提供します。
オーバーフロー/アンダーフローは実行を止めず、診断カウンタにのみ記録します。
"""
from typing import Optional

from chip8_tracer.core.state import Chip8State, STACK_DEPTH

# @intent:responsibility 16ビットの戻りアドレスをスタックに積みます。
# @intent:post-condition スタックが満杯の場合は何もせずFalseを返します（stack_overflowsを加算）。
def push(state: Chip8State, address: int) -> bool:
    if state.sp >= STACK_DEPTH:
        state.stack_overflows += 1
        return False
    state.stack[state.sp] = address & 0xFFFF
    state.sp += 1
    return True

# @intent:responsibility スタックから戻りアドレスを取り出します。
# @intent:post-condition スタックが空の場合はNoneを返します（stack_underflowsを加算）。
def pop(state: Chip8State) -> Optional[int]:
    if state.sp == 0:
        state.stack_underflows += 1
        return None
    state.sp -= 1
    return state.stack[state.sp]
