# chip8_tracer/instructions/maps.py
"""
ディスパッチキーと命令実装のマッピング定義。

キーは (上位ニブル, 副キー) のタプルです。副キーはファミリ0/E/Fでは下位バイト(nn)、
ファミリ8では下位ニブル(n)、それ以外はNone（上位ニブルのみで決定）です。
"""
from . import control
from . import load
from . import alu
from . import display
from . import keypad

# @intent:map ディスパッチキーからデコード関数へのマッピングテーブル。
DECODE_MAP = {
    # System / Control
    (0x0, 0xE0): display.decode_cls,
    (0x0, 0xEE): control.decode_ret,
    (0x0, None): control.decode_sys,
    (0x1, None): control.decode_jp,
    (0x2, None): control.decode_call,
    (0x3, None): control.decode_se_imm,
    (0x4, None): control.decode_sne_imm,
    (0x5, None): control.decode_se_reg,
    (0x9, None): control.decode_sne_reg,
    (0xB, None): control.decode_jp_offset,

    # Load
    (0x6, None): load.decode_ld_imm,
    (0x8, 0x0): load.decode_ld_reg,
    (0xA, None): load.decode_ld_i,
    (0xF, 0x07): load.decode_ld_vx_dt,
    (0xF, 0x15): load.decode_ld_dt_vx,
    (0xF, 0x18): load.decode_ld_st_vx,
    (0xF, 0x29): load.decode_ld_font,
    (0xF, 0x33): load.decode_ld_bcd,
    (0xF, 0x55): load.decode_ld_store,
    (0xF, 0x65): load.decode_ld_restore,

    # ALU
    (0x7, None): alu.decode_add_imm,
    (0x8, 0x1): alu.decode_or,
    (0x8, 0x2): alu.decode_and,
    (0x8, 0x3): alu.decode_xor,
    (0x8, 0x4): alu.decode_add_reg,
    (0x8, 0x5): alu.decode_sub,
    (0x8, 0x6): alu.decode_shr,
    (0x8, 0x7): alu.decode_subn,
    (0x8, 0xE): alu.decode_shl,
    (0xC, None): alu.decode_rnd,
    (0xF, 0x1E): alu.decode_add_i,

    # Display
    (0xD, None): display.decode_drw,

    # Keypad
    (0xE, 0x9E): keypad.decode_skp,
    (0xE, 0xA1): keypad.decode_sknp,
    (0xF, 0x0A): keypad.decode_ld_key,
}

# @intent:map ディスパッチキーから実行関数へのマッピングテーブル。
EXECUTE_MAP = {
    # System / Control
    (0x0, 0xE0): display.execute_cls,
    (0x0, 0xEE): control.execute_ret,
    (0x0, None): control.execute_sys,
    (0x1, None): control.execute_jp,
    (0x2, None): control.execute_call,
    (0x3, None): control.execute_se_imm,
    (0x4, None): control.execute_sne_imm,
    (0x5, None): control.execute_se_reg,
    (0x9, None): control.execute_sne_reg,
    (0xB, None): control.execute_jp_offset,

    # Load
    (0x6, None): load.execute_ld_imm,
    (0x8, 0x0): load.execute_ld_reg,
    (0xA, None): load.execute_ld_i,
    (0xF, 0x07): load.execute_ld_vx_dt,
    (0xF, 0x15): load.execute_ld_dt_vx,
    (0xF, 0x18): load.execute_ld_st_vx,
    (0xF, 0x29): load.execute_ld_font,
    (0xF, 0x33): load.execute_ld_bcd,
    (0xF, 0x55): load.execute_ld_store,
    (0xF, 0x65): load.execute_ld_restore,

    # ALU
    (0x7, None): alu.execute_add_imm,
    (0x8, 0x1): alu.execute_or,
    (0x8, 0x2): alu.execute_and,
    (0x8, 0x3): alu.execute_xor,
    (0x8, 0x4): alu.execute_add_reg,
    (0x8, 0x5): alu.execute_sub,
    (0x8, 0x6): alu.execute_shr,
    (0x8, 0x7): alu.execute_subn,
    (0x8, 0xE): alu.execute_shl,
    (0xC, None): alu.execute_rnd,
    (0xF, 0x1E): alu.execute_add_i,

    # Display
    (0xD, None): display.execute_drw,

    # Keypad
    (0xE, 0x9E): keypad.execute_skp,
    (0xE, 0xA1): keypad.execute_sknp,
    (0xF, 0x0A): keypad.execute_ld_key,
}
