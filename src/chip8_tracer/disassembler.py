# chip8_tracer/disassembler.py
"""
CHIP-8 Disassembler

メモリ上のバイナリデータを解析し、CHIP-8のニーモニックに変換します。
命令層のデコードロジックを再利用しますが、peekで読み込むためアクセスログは汚しません。
"""
from typing import List

from chip8_tracer.common.types import DisassemblyLine
from chip8_tracer.instructions import decode_opcode
from chip8_tracer.transport.memory import Memory

# @intent:responsibility 指定されたメモリ範囲を逆アセンブルし、表示用データを生成します。
def disassemble(memory: Memory, start_addr: int, length: int) -> List[DisassemblyLine]:
    """
    指定された範囲のメモリを2バイト単位で逆アセンブルします。

    Returns:
        List of (address, hex_bytes, mnemonic) tuples.
    """
    result = []
    current_addr = start_addr
    end_addr = min(start_addr + length, memory.get_size())

    # 末尾1バイトだけの半端な命令は表示しない
    while current_addr + 1 < end_addr:
        high = memory.peek(current_addr)
        low = memory.peek(current_addr + 1)
        operation = decode_opcode((high << 8) | low)
        result.append((current_addr, f"{high:02X} {low:02X}", operation.text()))
        current_addr += operation.length

    return result
