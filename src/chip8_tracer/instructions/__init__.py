"""
CHIP-8命令セット実装パッケージ。
"""
from typing import Callable, Dict, Optional, Tuple

from chip8_tracer.core.decoder import Fields, decode
from chip8_tracer.core.snapshot import Operation
from chip8_tracer.core.state import Chip8State
from .base import Environment
from .maps import DECODE_MAP, EXECUTE_MAP

DispatchKey = Tuple[int, Optional[int]]

# @intent:responsibility フィールドからディスパッチキーを求めます。
def dispatch_key(fields: Fields) -> DispatchKey:
    if fields.group in (0x0, 0xE, 0xF):
        return (fields.group, fields.nn)
    if fields.group == 0x8:
        return (fields.group, fields.n)
    return (fields.group, None)

def _lookup(table: Dict[DispatchKey, Callable], fields: Fields) -> Optional[Callable]:
    entry = table.get(dispatch_key(fields))
    if entry is None:
        # ファミリ全体の既定エントリ（例: 0nnn SYS）
        entry = table.get((fields.group, None))
    return entry

# @intent:responsibility 16ビットのオペコードをCHIP-8の命令としてデコードします。
def decode_opcode(opcode: int) -> Operation:
    """
    オペコードをデコードし、Operationオブジェクトを返します。
    未定義の組み合わせの場合は"UNKNOWN"を返します（実行時はNOP扱い）。
    """
    fields = decode(opcode)
    decoder = _lookup(DECODE_MAP, fields)
    if decoder:
        return decoder(opcode & 0xFFFF, fields)
    return Operation(opcode & 0xFFFF, "UNKNOWN", [f"#${opcode & 0xFFFF:04X}"], fields)

# @intent:responsibility デコードされた命令を実行し、マシン状態を変更します。
# @intent:pre-condition PCは既に次の命令を指しており、operationはdecode_opcodeで生成されている必要があります。
def execute_instruction(operation: Operation, state: Chip8State, env: Environment) -> None:
    executor = _lookup(EXECUTE_MAP, operation.fields)
    if executor:
        executor(state, operation, env)
