# chip8_tracer/loader/loader.py
"""
ROMローダーモジュール。
生バイナリ形式のCHIP-8プログラムを読み込み、マシンのメモリに配置します。
"""
from pathlib import Path
from typing import Union

from chip8_tracer.core.cpu import Chip8Cpu
from chip8_tracer.core.state import PROGRAM_START
from chip8_tracer.transport.memory import MEMORY_SIZE

class RomLoader:
    """
    ROMファイルを読み込み、CPUのメモリへロードするローダー。
    ファイルI/Oの失敗はOSErrorとしてそのまま呼び出し元へ伝播します。
    """
    # @intent:responsibility ROMイメージを読み込み、指定オフセットにロードします。
    # @intent:return ロードしたバイト数。
    def load_rom(self, file_path: Union[str, Path], cpu: Chip8Cpu, offset: int = PROGRAM_START) -> int:
        data = Path(file_path).read_bytes()
        if not data:
            raise ValueError(f"ROM file {file_path} is empty.")
        capacity = MEMORY_SIZE - offset
        if len(data) > capacity:
            raise ValueError(
                f"ROM file {file_path} is {len(data)} bytes; only {capacity} bytes fit at {offset:#05x}."
            )
        cpu.load_program(data, offset)
        return len(data)
