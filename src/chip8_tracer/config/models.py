from dataclasses import dataclass, field
from typing import Optional

from chip8_tracer.core.quirks import Quirks
from chip8_tracer.core.state import PROGRAM_START

@dataclass
class QuirkConfig:
    shift_uses_vx: bool = False
    jump_uses_vx: bool = False

    def to_quirks(self) -> Quirks:
        return Quirks(shift_uses_vx=self.shift_uses_vx, jump_uses_vx=self.jump_uses_vx)

@dataclass
class EmulatorConfig:
    rom: Optional[str] = None
    load_address: int = PROGRAM_START
    cycles_per_frame: int = 10  # 60Hz x 10 = 600 命令/秒
    timer_hz: int = 60
    seed: Optional[int] = None
    history_limit: int = 1000
    scale: int = 10  # UIの1ピクセルあたりの表示倍率
    quirks: QuirkConfig = field(default_factory=QuirkConfig)
