# chip8_tracer/core/state.py
"""
Core Layer (マシン状態)

このモジュールは、CHIP-8仮想マシンの全ての可変状態（メモリ、レジスタ、スタック、
タイマー、フレームバッファ、キー入力）を保持するデータ構造を定義します。
振る舞いは持たず、命令層が明示的に受け取って更新します。
"""
from dataclasses import dataclass, field
from typing import List

from chip8_tracer.transport.memory import Memory

# @intent:constant メモリレイアウトと画面サイズの定義。
FONT_START = 0x000
FONT_GLYPH_SIZE = 5
PROGRAM_START = 0x200
SCREEN_WIDTH = 64
SCREEN_HEIGHT = 32
SCREEN_SIZE = SCREEN_WIDTH * SCREEN_HEIGHT
REGISTER_COUNT = 16
STACK_DEPTH = 16
KEY_COUNT = 16
VF = 0xF

# @intent:constant 16進数字0-Fのグリフ（各5バイト、計80バイト）。
FONTSET = bytes([
    0xF0, 0x90, 0x90, 0x90, 0xF0,  # 0
    0x20, 0x60, 0x20, 0x20, 0x70,  # 1
    0xF0, 0x10, 0xF0, 0x80, 0xF0,  # 2
    0xF0, 0x10, 0xF0, 0x10, 0xF0,  # 3
    0x90, 0x90, 0xF0, 0x10, 0x10,  # 4
    0xF0, 0x80, 0xF0, 0x10, 0xF0,  # 5
    0xF0, 0x80, 0xF0, 0x90, 0xF0,  # 6
    0xF0, 0x10, 0x20, 0x40, 0x40,  # 7
    0xF0, 0x90, 0xF0, 0x90, 0xF0,  # 8
    0xF0, 0x90, 0xF0, 0x10, 0xF0,  # 9
    0xF0, 0x90, 0xF0, 0x90, 0x90,  # A
    0xE0, 0x90, 0xE0, 0x90, 0xE0,  # B
    0xF0, 0x80, 0x80, 0x80, 0xF0,  # C
    0xE0, 0x90, 0x90, 0x90, 0xE0,  # D
    0xF0, 0x80, 0xF0, 0x80, 0xF0,  # E
    0xF0, 0x80, 0xF0, 0x80, 0x80,  # F
])

# @intent:responsibility CHIP-8マシンの完全な状態を保持します。
@dataclass
class Chip8State:
    """
    CHIP-8のマシン状態を保持するデータクラス。
    VFは汎用レジスタであると同時にキャリー/ボロー/衝突フラグとして上書きされます。
    """
    memory: Memory = field(default_factory=Memory)
    v: List[int] = field(default_factory=lambda: [0] * REGISTER_COUNT)
    i: int = 0x0000  # Index Register
    pc: int = PROGRAM_START  # Program Counter
    stack: List[int] = field(default_factory=lambda: [0] * STACK_DEPTH)
    sp: int = 0  # スタック上のエントリ数 (0 = 空)
    delay_timer: int = 0
    sound_timer: int = 0
    frame_buffer: bytearray = field(default_factory=lambda: bytearray(SCREEN_SIZE))
    keys: List[bool] = field(default_factory=lambda: [False] * KEY_COUNT)
    opcode: int = 0x0000  # 直前にフェッチしたオペコード
    # Fx0A のキー待ち状態
    waiting_for_key: bool = False
    key_wait_held: List[bool] = field(default_factory=lambda: [False] * KEY_COUNT)
    # 診断用カウンタ（実行は停止しない）
    stack_overflows: int = 0
    stack_underflows: int = 0

    # @intent:responsibility 他の状態と共有部分を持たない完全なコピーを返します。
    # @intent:rationale Snapshotや履歴に保存した状態が、以降の実行で変化しないようにするため。
    def copy(self) -> "Chip8State":
        return Chip8State(
            memory=self.memory.copy(),
            v=list(self.v),
            i=self.i,
            pc=self.pc,
            stack=list(self.stack),
            sp=self.sp,
            delay_timer=self.delay_timer,
            sound_timer=self.sound_timer,
            frame_buffer=bytearray(self.frame_buffer),
            keys=list(self.keys),
            opcode=self.opcode,
            waiting_for_key=self.waiting_for_key,
            key_wait_held=list(self.key_wait_held),
            stack_overflows=self.stack_overflows,
            stack_underflows=self.stack_underflows,
        )

    @property
    def vf(self) -> int:
        return self.v[VF]

    @vf.setter
    def vf(self, value: int) -> None:
        self.v[VF] = value & 0xFF

# @intent:responsibility 全フィールドをゼロ初期化し、フォントセットを配置した初期状態を生成します。
def create_initial_state() -> Chip8State:
    """
    Init: 状態をゼロクリアし、memory[0x000:0x050]にフォントセットをコピーします。
    """
    state = Chip8State()
    state.memory.load(FONT_START, FONTSET)
    return state
