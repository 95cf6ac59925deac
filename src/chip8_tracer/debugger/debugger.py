# chip8_tracer/debugger/debugger.py
"""
Debugger Layer

Chip8Cpuの実行を制御し、条件（ブレークポイント）成立時に実行を中断させます。
各命令のSnapshotを一定数まで保持し、ステップバック（状態の差し戻し）を提供します。
UIのフレームタイマーからは run_frame() を通じて、命令実行とタイマー減算を一括で駆動します。
"""
from collections import deque
from dataclasses import dataclass
from enum import Enum
from typing import Deque, List, Optional

from chip8_tracer.core.cpu import Chip8Cpu
from chip8_tracer.core.snapshot import Snapshot
from chip8_tracer.core.state import Chip8State
from chip8_tracer.transport.memory import MemoryAccessType

DEFAULT_HISTORY_LIMIT = 1000

# @intent:responsibility 実行を止める条件の種類。
class BreakpointConditionType(Enum):
    PC_MATCH = "PC_MATCH"               # 命令フェッチ前のPCが value と一致
    MEMORY_READ = "MEMORY_READ"         # 直前の命令が address を読んだ（フェッチを含む）
    MEMORY_WRITE = "MEMORY_WRITE"       # 直前の命令が address に書いた
    REGISTER_VALUE = "REGISTER_VALUE"   # register_name の値が value になった
    REGISTER_CHANGE = "REGISTER_CHANGE" # register_name の値が直前の命令で変わった

# @intent:responsibility 単一のブレークポイント定義。
@dataclass(frozen=True)
class BreakpointCondition:
    """
    register_name はレジスタマップのキー（"V0".."VF", "I", "PC", "SP", "DT", "ST"）です。
    不変なので、同一内容の条件は同じブレークポイントとして扱われます。
    """
    condition_type: BreakpointConditionType
    value: Optional[int] = None
    address: Optional[int] = None
    register_name: Optional[str] = None
    enabled: bool = True

# @intent:utility_function レジスタマップのキーで状態からレジスタ値を取り出します。
def read_register(state: Chip8State, name: str) -> Optional[int]:
    name = name.upper()
    if len(name) == 2 and name[0] == "V":
        try:
            return state.v[int(name[1], 16)]
        except ValueError:
            return None
    return {
        "I": state.i, "PC": state.pc, "SP": state.sp,
        "DT": state.delay_timer, "ST": state.sound_timer,
    }.get(name)

# Fx0Aでキー待ちのまま同じ命令に留まったステップ
def _is_stall(snapshot: Snapshot) -> bool:
    return snapshot.state.waiting_for_key

def _touched(snapshot: Snapshot, address: Optional[int], access_type: MemoryAccessType) -> bool:
    return any(a.access_type == access_type and a.address == address for a in snapshot.memory_activity)

# @intent:responsibility マシンの実行制御とブレークポイント管理を行います。
class Debugger:
    """
    ブレークポイントの評価は2段階です。
    PC_MATCHは命令を実行する前に、それ以外は実行直後のSnapshotに対して評価します。
    """
    def __init__(self, cpu: Chip8Cpu, history_limit: int = DEFAULT_HISTORY_LIMIT):
        self._cpu = cpu
        self._breakpoints: List[BreakpointCondition] = []
        self._running = False
        self._stopped_at: Optional[int] = None
        self._history: Deque[Snapshot] = deque(maxlen=history_limit)
        self._last_snapshot: Optional[Snapshot] = None
        # 履歴を遡り切った時の戻り先と、REGISTER_CHANGEの比較元
        self._initial_state = cpu.get_state().copy()
        self._initial_rng_state = cpu.get_rng_state()
        self._previous_state = self._initial_state

    @property
    def cpu(self) -> Chip8Cpu:
        return self._cpu

    def is_running(self) -> bool:
        return self._running

    def add_breakpoint(self, condition: BreakpointCondition) -> None:
        if condition not in self._breakpoints:
            self._breakpoints.append(condition)

    def remove_breakpoint(self, condition: BreakpointCondition) -> None:
        if condition in self._breakpoints:
            self._breakpoints.remove(condition)

    def get_breakpoints(self) -> List[BreakpointCondition]:
        return list(self._breakpoints)

    def get_history(self) -> List[Snapshot]:
        return list(self._history)

    def get_last_snapshot(self) -> Optional[Snapshot]:
        return self._last_snapshot

    # @intent:responsibility 現在の状態を履歴の起点として記録し直します（ROMロードやリセット後に呼び出す）。
    def reset_history(self) -> None:
        self._history.clear()
        self._last_snapshot = None
        self._stopped_at = None
        self._initial_state = self._cpu.get_state().copy()
        self._initial_rng_state = self._cpu.get_rng_state()
        self._previous_state = self._initial_state

    def _active(self, condition_type: BreakpointConditionType) -> List[BreakpointCondition]:
        return [bp for bp in self._breakpoints if bp.enabled and bp.condition_type == condition_type]

    def _hits_pc(self, pc: int) -> bool:
        return any(bp.value == pc for bp in self._active(BreakpointConditionType.PC_MATCH))

    # @intent:responsibility 実行直後のSnapshotに対して、PC_MATCH以外の条件を評価します。
    def _hits_after_step(self, snapshot: Snapshot) -> bool:
        for bp in self._active(BreakpointConditionType.MEMORY_READ):
            if _touched(snapshot, bp.address, MemoryAccessType.READ):
                return True
        for bp in self._active(BreakpointConditionType.MEMORY_WRITE):
            if _touched(snapshot, bp.address, MemoryAccessType.WRITE):
                return True
        for bp in self._active(BreakpointConditionType.REGISTER_VALUE):
            if bp.register_name and read_register(snapshot.state, bp.register_name) == bp.value:
                return True
        for bp in self._active(BreakpointConditionType.REGISTER_CHANGE):
            if not bp.register_name:
                continue
            after = read_register(snapshot.state, bp.register_name)
            if after is not None and after != read_register(self._previous_state, bp.register_name):
                return True
        return False

    # @intent:responsibility 1命令を実行し、そのSnapshotを履歴に追加します。
    # @intent:rationale Fx0Aでの連続した待機は1エントリにまとめ、キー待ちで履歴が押し流されないようにします。
    def step_instruction(self) -> Snapshot:
        self._previous_state = self._cpu.get_state().copy()
        snapshot = self._cpu.step()
        if self._history and _is_stall(snapshot) and _is_stall(self._history[-1]) \
                and self._history[-1].state.pc == snapshot.state.pc:
            self._history[-1] = snapshot
        else:
            self._history.append(snapshot)
        self._last_snapshot = snapshot
        return snapshot

    # @intent:responsibility 直前の命令を取り消し、1つ前のSnapshotの状態を復元します。
    # @intent:return 復元後の最新Snapshot。履歴の先頭まで戻った場合はNone（初期状態を復元）。
    def step_back(self) -> Optional[Snapshot]:
        if not self._history:
            return None
        self._history.pop()
        # Snapshotはメモリを含む完全なコピーなので、状態を差し戻すだけで済む
        target = self._history[-1] if self._history else None
        if target:
            self._cpu.restore_state(target.state, target.rng_state)
        else:
            self._cpu.restore_state(self._initial_state, self._initial_rng_state)
        self._last_snapshot = target
        return target

    def _halt(self, pc: int) -> bool:
        self._running = False
        print(f"Breakpoint hit at PC: {pc:#05x}")
        return True

    # @intent:responsibility ブレークポイントにヒットするか、stop()されるか、max_stepsに達するまで実行します。
    # @intent:return ブレークポイントで停止した場合はTrue。
    def run(self, max_steps: Optional[int] = None) -> bool:
        self._running = True
        steps = 0

        # 直前に停止したPCブレークポイントからは1命令進めて抜け出す
        if self._stopped_at is not None and self._stopped_at == self._cpu.get_state().pc:
            self.step_instruction()
            steps += 1
        self._stopped_at = None

        while self._running and (max_steps is None or steps < max_steps):
            pc = self._cpu.get_state().pc
            if self._hits_pc(pc):
                self._stopped_at = pc
                return self._halt(pc)

            snapshot = self.step_instruction()
            steps += 1
            if self._hits_after_step(snapshot):
                return self._halt(snapshot.state.pc)

        self._running = False
        return False

    # @intent:responsibility 1フレーム分（cycles命令）を実行し、その後タイマーを1回減算します。
    # @intent:rationale 命令実行とタイマー減算を同じスレッド・同じ呼び出しで行い、タイマーへの競合アクセスを避けます。
    def run_frame(self, cycles: int) -> bool:
        """
        Returns:
            ブレークポイントで停止した場合はTrue（その場合タイマーは減算しません）。
        """
        hit = self.run(max_steps=cycles)
        if not hit:
            self._cpu.tick_timers()
        return hit

    def stop(self) -> None:
        self._running = False
