"""
CPU・デバッガ・UIの間で受け渡す表示用の型。
"""
from typing import List, NamedTuple, Tuple

# @intent:data_structure レジスタ1本分の表示情報。width は表示桁数の決定に使う（8bit→2桁、16bit→4桁）。
class RegisterInfo(NamedTuple):
    name: str
    width: int

# @intent:data_structure 同じ枠内に並べるレジスタのまとまり（"General", "Index/Pointers", "Timers"）。
class RegisterLayoutInfo(NamedTuple):
    group_name: str
    registers: List[RegisterInfo]

# (address, "HH LL", "MNEMONIC operands")
DisassemblyLine = Tuple[int, str, str]
