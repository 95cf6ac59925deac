from pathlib import Path
from typing import Tuple

from chip8_tracer.core.cpu import Chip8Cpu
from chip8_tracer.debugger.debugger import Debugger
from chip8_tracer.loader.loader import RomLoader
from .models import EmulatorConfig

# @intent:responsibility 設定（Config）に基づいて、CPUとデバッガを生成・接続し、ROMをロードします。
class SystemBuilder:
    def build_system(self, config: EmulatorConfig, base_dir: str = ".") -> Tuple[Chip8Cpu, Debugger]:
        cpu = Chip8Cpu(quirks=config.quirks.to_quirks(), seed=config.seed)

        if config.rom:
            rom_path = Path(config.rom)
            if not rom_path.is_absolute():
                rom_path = Path(base_dir) / rom_path
            size = RomLoader().load_rom(rom_path, cpu, config.load_address)
            if config.load_address != 0x200:
                print(f"Warning: ROM loaded at {config.load_address:#05x}; execution still starts at 0x200")
            print(f"Loaded {size} bytes from {rom_path}")

        debugger = Debugger(cpu, history_limit=config.history_limit)
        return cpu, debugger
