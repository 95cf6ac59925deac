# chip8_tracer/core/decoder.py
"""
命令デコーダ。16ビットのオペコードをニブル単位のフィールドに分解します。
"""
from typing import NamedTuple

# @intent:data_structure オペコードから抽出したフィールド。
class Fields(NamedTuple):
    group: int  # 上位ニブル（命令ファミリ）
    x: int      # 第2ニブル（レジスタ番号）
    y: int      # 第3ニブル（レジスタ番号）
    n: int      # 4ビット即値
    nn: int     # 8ビット即値
    nnn: int    # 12ビットアドレス

# @intent:responsibility オペコードを各フィールドに分解します。副作用はなく、失敗もしません。
def decode(opcode: int) -> Fields:
    opcode &= 0xFFFF
    return Fields(
        group=(opcode & 0xF000) >> 12,
        x=(opcode & 0x0F00) >> 8,
        y=(opcode & 0x00F0) >> 4,
        n=opcode & 0x000F,
        nn=opcode & 0x00FF,
        nnn=opcode & 0x0FFF,
    )
