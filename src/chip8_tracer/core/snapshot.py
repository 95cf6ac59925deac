# chip8_tracer/core/snapshot.py
"""
実行状態の不変スナップショット

このモジュールは、1命令実行後のマシン状態と、その命令の詳細、
実行中に発生したメモリアクセスを記録した不変のデータ構造を定義します。
UIへの情報提供と、デバッガの履歴記録に用いる責務を負います。
"""
from dataclasses import dataclass, field
from typing import Any, List, Optional, Tuple

from chip8_tracer.core.decoder import Fields
from chip8_tracer.core.state import Chip8State
from chip8_tracer.transport.memory import MemoryAccess

# @intent:responsibility デコードされた命令の詳細を記録します。
@dataclass(frozen=True) # 不変データ構造
class Operation:
    """
    デコードされた命令（オペコード、ニーモニック、オペランド、フィールド）を記録するデータクラス。
    """
    opcode: int # 例: 0x6005
    mnemonic: str # 例: "LD"
    operands: List[str] = field(default_factory=list) # 例: ["V0", "#05"]
    fields: Optional[Fields] = None
    length: int = 2 # 命令のバイト長（CHIP-8は常に2）

    # @intent:responsibility "MNEMONIC op1, op2" 形式の表示文字列を返します。
    def text(self) -> str:
        if self.operands:
            return f"{self.mnemonic} " + ", ".join(self.operands)
        return self.mnemonic

# @intent:responsibility 実行に関するメタデータを記録します。
@dataclass(frozen=True) # 不変データ構造
class Metadata:
    cycle_count: int # 累計実行命令数
    symbol_info: Optional[str] = None # 例: "200: LD V0, #$05"

# @intent:responsibility ある一時点におけるマシンの完全な状態を不変に記録します。
@dataclass(frozen=True) # 不変データ構造
class Snapshot:
    """
    1命令実行直後のマシン状態のコピーと、その命令で発生したメモリアクセス、乱数生成器の状態を保持します。
    """
    state: Chip8State
    operation: Operation
    metadata: Metadata
    memory_activity: List[MemoryAccess] = field(default_factory=list)
    rng_state: Optional[Tuple[Any, ...]] = None # 命令実行後の random.Random.getstate()
