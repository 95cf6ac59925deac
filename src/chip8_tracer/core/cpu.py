# chip8_tracer/core/cpu.py
"""
Core Layer (CHIP-8 CPU)

このモジュールは、マシン状態の所有と命令サイクル（フェッチ→デコード→PC更新→実行）の駆動、
および外部コラボレータ（ローダー、入力、タイマー、描画）向けのインターフェースを提供します。
具体的な命令の振る舞いはInstruction Layerに移譲されます。
"""
import random
from typing import Any, Dict, List, Optional, Tuple

from chip8_tracer.common.types import RegisterLayoutInfo, RegisterInfo, DisassemblyLine
from chip8_tracer.core.quirks import Quirks
from chip8_tracer.core.snapshot import Operation, Metadata, Snapshot
from chip8_tracer.core.state import (
    Chip8State, create_initial_state, PROGRAM_START, KEY_COUNT, REGISTER_COUNT,
)
from chip8_tracer.instructions import decode_opcode, execute_instruction
from chip8_tracer.instructions.base import Environment
from chip8_tracer import disassembler

# @intent:responsibility CHIP-8のエミュレーションロジック（フェッチ、デコード、実行）を提供します。
class Chip8Cpu:
    """
    CHIP-8仮想マシンをエミュレートするクラス。
    状態はインスタンスが排他的に所有し、命令層へは明示的に渡されます。
    """
    # @intent:responsibility 初期状態（フォントセット配置済み）と実行環境を準備します。
    def __init__(self, quirks: Optional[Quirks] = None, seed: Optional[int] = None):
        self._seed = seed
        self._env = Environment(quirks=quirks or Quirks(), rng=random.Random(seed))
        self._state: Chip8State = create_initial_state()
        self._cycle_count: int = 0
        self._program: Optional[Tuple[bytes, int]] = None
        # @intent:rationale Stateオブジェクトの直接操作を避けるため、protectedな命名規則を採用。
        #                  外部からのアクセスは`get_state()`メソッドを介して行う。

    @property
    def quirks(self) -> Quirks:
        return self._env.quirks

    @property
    def cycle_count(self) -> int:
        return self._cycle_count

    # @intent:responsibility マシンを初期状態に戻します（ハードリセット）。メモリ上のプログラムも消去されます。
    # @intent:post-condition シード指定時、乱数列は生成直後と同じ位置から再開します。
    def reset(self) -> None:
        self._state = create_initial_state()
        self._cycle_count = 0
        self._env.rng.seed(self._seed)

    # @intent:responsibility ハードリセット後、直前にロードしたプログラムを再配置します。
    def restart(self) -> None:
        self.reset()
        if self._program is not None:
            data, offset = self._program
            self._state.memory.load(offset, data)

    # @intent:responsibility プログラムイメージをメモリに配置します。
    # @intent:pre-condition offset + len(data) <= 4096。満たさない場合はValueError。
    def load_program(self, data: bytes, offset: int = PROGRAM_START) -> None:
        payload = bytes(data)
        self._state.memory.load(offset, payload)
        self._program = (payload, offset)

    # @intent:responsibility 現在のマシン状態を返します。
    def get_state(self) -> Chip8State:
        return self._state

    # @intent:responsibility 乱数生成器の内部状態を返します（Snapshotとステップバック用）。
    def get_rng_state(self) -> Tuple[Any, ...]:
        return self._env.rng.getstate()

    # @intent:responsibility 保存されたマシン状態に復元します（デバッガのステップバック用）。
    # @intent:rationale キーマトリクスは入力コラボレータの所有物のため、復元せず現在の押下状態を引き継ぎます。
    def restore_state(self, state: Chip8State, rng_state: Optional[Tuple[Any, ...]] = None) -> None:
        """
        Fx0Aで待機中の状態に戻る場合、現在押されているキーは「待機開始時に押されていた」ものとして扱い、
        離して押し直すまで待機を解除しません。
        """
        keys = list(self._state.keys)
        restored = state.copy()
        restored.keys = keys
        restored.key_wait_held = list(keys) if restored.waiting_for_key else [False] * KEY_COUNT
        self._state = restored
        if rng_state is not None:
            self._env.rng.setstate(rng_state)

    # @intent:responsibility キーマトリクスを更新します。入力コラボレータがstepの合間に呼び出します。
    def set_key(self, key: int, pressed: bool) -> None:
        if not 0 <= key < KEY_COUNT:
            raise ValueError(f"Key {key} is out of range 0x0-0xF.")
        self._state.keys[key] = bool(pressed)

    # @intent:responsibility ディレイ/サウンドタイマーを1ずつ減算します（60Hzで外部から呼び出される想定）。
    def tick_timers(self) -> None:
        if self._state.delay_timer > 0:
            self._state.delay_timer -= 1
        if self._state.sound_timer > 0:
            self._state.sound_timer -= 1

    # @intent:responsibility サウンドタイマーが動作中か（ブザーが鳴るべきか）を返します。
    def is_sound_active(self) -> bool:
        return self._state.sound_timer > 0

    # @intent:responsibility 描画コラボレータ向けにフレームバッファ（2048セル、1=点灯）の読み取り専用コピーを返します。
    def frame_buffer(self) -> bytes:
        return bytes(self._state.frame_buffer)

    # @intent:responsibility PCから2バイトをビッグエンディアンで読み出します。
    def _fetch(self) -> int:
        memory = self._state.memory
        pc = self._state.pc
        return (memory.read(pc) << 8) | memory.read(pc + 1)

    def _decode(self, opcode: int) -> Operation:
        return decode_opcode(opcode)

    # @intent:responsibility 命令実行前にPCを命令長分進めます。
    # @intent:rationale ジャンプ/コール/スキップ命令はこの値を上書き・加算するだけで済みます。
    def _update_pc(self, operation: Operation) -> None:
        self._state.pc = (self._state.pc + operation.length) & 0xFFFF

    def _execute(self, operation: Operation) -> None:
        execute_instruction(operation, self._state, self._env)

    # @intent:responsibility CPUを1命令サイクル進め、その結果のスナップショットを返します。
    # @intent:flow ログクリア → フェッチ → デコード → PC更新 → 実行 → Snapshot生成 の順序で処理を行います。
    def step(self) -> Snapshot:
        """
        1命令を実行します。タイマー減算やペーシングは行いません。
        Fx0Aでキー待ち中の場合、PCは同じ命令に留まり、命令数はカウントされません。
        """
        self._state.memory.get_and_clear_activity_log()
        initial_pc = self._state.pc

        opcode = self._fetch()
        self._state.opcode = opcode
        operation = self._decode(opcode)
        self._update_pc(operation)
        self._execute(operation)

        return self._create_snapshot(initial_pc, operation)

    # @intent:responsibility 実行結果からSnapshotオブジェクトを生成します。
    def _create_snapshot(self, initial_pc: int, operation: Operation) -> Snapshot:
        memory_activity = self._state.memory.get_and_clear_activity_log()

        if not self._state.waiting_for_key:
            self._cycle_count += 1

        symbol_info = f"{initial_pc:03X}: {operation.text()}"

        return Snapshot(
            state=self._state.copy(), # 以降の実行で変化しないようにコピーを保持
            operation=operation,
            metadata=Metadata(cycle_count=self._cycle_count, symbol_info=symbol_info),
            memory_activity=memory_activity,
            rng_state=self._env.rng.getstate(),
        )

    # @intent:responsibility UI表示用に、現在のレジスタ値を辞書形式で提供します。
    def get_register_map(self) -> Dict[str, int]:
        s = self._state
        registers = {f"V{n:X}": s.v[n] for n in range(REGISTER_COUNT)}
        registers.update({
            "I": s.i, "PC": s.pc, "SP": s.sp, "DT": s.delay_timer, "ST": s.sound_timer
        })
        return registers

    # @intent:responsibility UIのレジスタ表示レイアウト（グループ化）を定義します。
    def get_register_layout(self) -> List[RegisterLayoutInfo]:
        return [
            RegisterLayoutInfo("General", [RegisterInfo(f"V{n:X}", 8) for n in range(REGISTER_COUNT)]),
            RegisterLayoutInfo("Index/Pointers", [
                RegisterInfo("I", 16), RegisterInfo("PC", 16), RegisterInfo("SP", 8)
            ]),
            RegisterLayoutInfo("Timers", [
                RegisterInfo("DT", 8), RegisterInfo("ST", 8)
            ]),
        ]

    # @intent:responsibility UI表示用に、現在のフラグ状態を辞書形式で提供します。
    def get_flag_state(self) -> Dict[str, bool]:
        s = self._state
        return {
            "VF": s.vf != 0, "KEY_WAIT": s.waiting_for_key, "SOUND": s.sound_timer > 0
        }

    # @intent:responsibility 指定範囲のメモリを逆アセンブルします。
    def disassemble(self, start_addr: int, length: int) -> List[DisassemblyLine]:
        return disassembler.disassemble(self._state.memory, start_addr, length)
