# chip8_tracer/transport/memory.py
"""
Transport Layer (メモリ空間)

このモジュールは、CHIP-8の4KBメモリ空間を抽象化し、
命令実行中の読み書きアクセスを記録する責務を負います。
"""
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Optional

MEMORY_SIZE = 0x1000
ADDRESS_MASK = MEMORY_SIZE - 1

# @intent:responsibility メモリアクセスを記録するためのタイプを定義します。
class MemoryAccessType(Enum):
    READ = "READ"
    WRITE = "WRITE"

# @intent:responsibility 個々のメモリアクセス操作を記録します。
@dataclass(frozen=True) # 不変データ構造
class MemoryAccess:
    """
    メモリ上で行われた単一のアクセス（読み込みまたは書き込み）を記録するデータクラス。
    """
    address: int
    data: int # 8bit value
    access_type: MemoryAccessType
    previous_data: Optional[int] = None # WRITE時の書き込み前の値

# @intent:responsibility 4KBのメモリ空間を保持し、アクセスをログに記録します。
# @intent:rationale CHIP-8プログラムは信頼できない入力であるため、アドレスは例外を投げずに
#                  4096でラップします（境界外アクセスによる異常終了を防ぐ）。
class Memory:
    """
    CHIP-8のメモリ空間（4096バイト）。
    read/writeはアクセスログを残し、peek/load/添字アクセスはログを残しません。
    """
    def __init__(self, size: int = MEMORY_SIZE):
        if not isinstance(size, int) or size <= 0:
            raise ValueError("Memory size must be a positive integer.")
        self._data = bytearray(size)
        self._size = size
        self._activity_log: List[MemoryAccess] = []

    def _wrap(self, address: int) -> int:
        return address % self._size

    # @intent:responsibility 指定されたアドレスから8bitのデータを読み出し、ログに記録します。
    def read(self, address: int) -> int:
        address = self._wrap(address)
        data = self._data[address]
        self._activity_log.append(MemoryAccess(address, data, MemoryAccessType.READ))
        return data

    # @intent:responsibility 指定されたアドレスに8bitのデータを書き込み、ログに記録します。
    def write(self, address: int, data: int) -> None:
        address = self._wrap(address)
        data &= 0xFF
        previous = self._data[address]
        self._data[address] = data
        self._activity_log.append(MemoryAccess(address, data, MemoryAccessType.WRITE, previous))

    # @intent:responsibility ログを記録せずに指定されたアドレスからデータを読み出します。
    def peek(self, address: int) -> int:
        """
        UIや逆アセンブラなどのインスペクタ用。
        """
        return self._data[self._wrap(address)]

    # @intent:responsibility ログを記録せずにバイト列をまとめて書き込みます。
    # @intent:pre-condition offset + len(data) はメモリサイズ以下である必要があります。
    def load(self, offset: int, data: Iterable[int]) -> None:
        """
        フォントやROMイメージの配置に使用します。通常の命令実行経由ではありません。
        """
        payload = bytes(data)
        if offset < 0 or offset + len(payload) > self._size:
            raise ValueError(
                f"Image of {len(payload)} bytes at {offset:#05x} does not fit in {self._size} bytes of memory."
            )
        self._data[offset:offset + len(payload)] = payload

    # @intent:responsibility 記録されたアクセスログを取得し、クリアします。
    def get_and_clear_activity_log(self) -> List[MemoryAccess]:
        log = self._activity_log
        self._activity_log = []
        return log

    def clear(self) -> None:
        self._data[:] = bytes(self._size)
        self._activity_log = []

    def dump(self) -> bytes:
        return bytes(self._data)

    def copy(self) -> "Memory":
        clone = Memory(self._size)
        clone._data[:] = self._data
        return clone

    def get_size(self) -> int:
        return self._size

    def __len__(self) -> int:
        return self._size

    def __getitem__(self, address: int) -> int:
        return self.peek(address)

    def __setitem__(self, address: int, data: int) -> None:
        self._data[self._wrap(address)] = data & 0xFF

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Memory):
            return NotImplemented
        return self._data == other._data
