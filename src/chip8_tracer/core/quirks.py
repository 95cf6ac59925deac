# chip8_tracer/core/quirks.py
"""
互換性スイッチ（Quirk）の定義。

CHIP-8インタプリタ間で挙動が分かれる命令について、どちらを採用するかを保持します。
既定値はCOSMAC VIP上のオリジナルインタプリタの挙動です。
"""
from dataclasses import dataclass

# @intent:responsibility 実行時に参照される互換性スイッチを保持します。
@dataclass(frozen=True)
class Quirks:
    # True: 8xy6/8xyE が V[y] ではなく V[x] をシフトする（CHIP-48/SUPER-CHIP系）
    shift_uses_vx: bool = False
    # True: Bnnn が V[0] ではなく V[x]（nnnの上位ニブル）を加算する
    jump_uses_vx: bool = False
