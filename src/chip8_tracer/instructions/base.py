# chip8_tracer/instructions/base.py
"""
CHIP-8命令実装用の共通ユーティリティ。
"""
import random
from dataclasses import dataclass, field

from chip8_tracer.core.quirks import Quirks
from chip8_tracer.core.state import Chip8State

# @intent:responsibility 命令実行時に状態以外で必要となる外部要素（互換性スイッチ、乱数源）を保持します。
@dataclass
class Environment:
    quirks: Quirks = field(default_factory=Quirks)
    rng: random.Random = field(default_factory=random.Random)

# @intent:utility_function 次の命令をスキップします（PCは既に次の命令を指しているため、さらに2進める）。
def skip_next(state: Chip8State) -> None:
    state.pc = (state.pc + 2) & 0xFFFF

# @intent:utility_function 表示用のレジスタ名を返します。
def reg(index: int) -> str:
    return f"V{index:X}"

def addr(value: int) -> str:
    return f"${value:03X}"

def imm(value: int) -> str:
    return f"#${value:02X}"
