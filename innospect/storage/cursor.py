"""
页缓冲区上的顺序读取游标。

InnoDB 磁盘格式中的整数均为大端、定长、无符号。
"""

import struct
from typing import Tuple, Union

from .errors import PageOutOfRange

Buffer = Union[bytes, bytearray, memoryview]

UINT8 = struct.Struct('>B')
UINT16 = struct.Struct('>H')
UINT32 = struct.Struct('>I')
UINT64 = struct.Struct('>Q')


class ByteCursor:
    """
    绑定到一个缓冲区的读取游标，每次读取后位置前移所读宽度。
    越界读取抛出 PageOutOfRange，且位置保持不变。
    """

    def __init__(self, buffer: Buffer, offset: int = 0):
        self._buffer = buffer
        self._size = len(buffer)
        self.position = 0
        self.seek(offset)

    def seek(self, offset: int) -> 'ByteCursor':
        if offset < 0 or offset > self._size:
            raise PageOutOfRange(offset, 0, self._size)
        self.position = offset
        return self

    def _take(self, length: int) -> int:
        start = self.position
        if length < 0 or start + length > self._size:
            raise PageOutOfRange(start, length, self._size)
        self.position = start + length
        return start

    def read_struct(self, fmt: struct.Struct) -> Tuple:
        start = self._take(fmt.size)
        return fmt.unpack_from(self._buffer, start)

    def read_uint8(self) -> int:
        return self.read_struct(UINT8)[0]

    def read_uint16(self) -> int:
        return self.read_struct(UINT16)[0]

    def read_uint32(self) -> int:
        return self.read_struct(UINT32)[0]

    def read_uint48(self) -> int:
        # 事务 ID 等 6 字节字段
        start = self._take(6)
        return int.from_bytes(self._buffer[start:start + 6], 'big')

    def read_uint64(self) -> int:
        return self.read_struct(UINT64)[0]

    def read_bytes(self, length: int) -> bytes:
        start = self._take(length)
        return bytes(self._buffer[start:start + length])

    def __repr__(self) -> str:
        return f"<ByteCursor position={self.position} size={self._size}>"
