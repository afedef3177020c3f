"""
通用页抽象与 FIL 头/尾解码。

所有 InnoDB 页都以 38 字节的 FIL 头开始、以 8 字节的 FIL 尾结束，
中间区域由专用页类（B+树节点、XDES 等）解释。Page 本身只负责：
- 持有页缓冲区与所属表空间引用
- 解码 FIL 头/尾（只解码一次并缓存）
- 根据类型码在 PageTypeRegistry 中查找专用类并重新构造
"""

from dataclasses import dataclass
from enum import IntEnum
from typing import TYPE_CHECKING, Optional, Union

from loguru import logger
from rich import box
from rich.console import Console
from rich.table import Table

from innospect.config import UNDEFINED_PAGE_NUMBER
from .cursor import Buffer, ByteCursor
from .errors import MalformedPage, PageOutOfRange
from .registry import PAGE_TYPE_REGISTRY, PageTypeRegistry

if TYPE_CHECKING:
    from .space import Space


class PageType(IntEnum):
    """include/fil0fil.h 中的页类型常量。"""
    ALLOCATED = 0        # 新分配的页
    UNDO_LOG = 2
    INODE = 3
    IBUF_FREE_LIST = 4
    IBUF_BITMAP = 5
    SYS = 6
    TRX_SYS = 7
    FSP_HDR = 8
    XDES = 9             # 区描述页
    BLOB = 10
    ZBLOB = 11           # 第一个压缩 BLOB 页
    ZBLOB2 = 12
    INDEX = 17855        # B+树节点


@dataclass(frozen=True)
class UnknownPageType:
    """无法识别的类型码，保留原始数值而不是报错。"""
    code: int

    @property
    def name(self) -> str:
        return f"UNKNOWN({self.code})"

    def __str__(self) -> str:
        return self.name


PageKind = Union[PageType, UnknownPageType]


def page_type_for(code: int) -> PageKind:
    try:
        return PageType(code)
    except ValueError:
        return UnknownPageType(code)


def maybe_undefined(value: int) -> Optional[int]:
    """prev/next 指针中的 0xFFFFFFFF 表示没有链接，转换为 None。"""
    return None if value == UNDEFINED_PAGE_NUMBER else value


@dataclass(frozen=True)
class FilHeader:
    checksum: int
    offset: int
    prev: Optional[int]
    next: Optional[int]
    lsn: int
    page_type: PageKind
    type_code: int
    flush_lsn: int
    space_id: int


@dataclass(frozen=True)
class FilTrailer:
    checksum: int
    lsn_low32: int


class Page:
    """
    通用页。若某类型没有专用解码类，Page.load 返回的就是它本身。
    缓冲区在构造后不再修改。
    """

    FIL_HEADER_SIZE = 4 + 4 + 4 + 4 + 8 + 2 + 8 + 4
    FIL_TRAILER_SIZE = 4 + 4
    MIN_PAGE_SIZE = FIL_HEADER_SIZE + FIL_TRAILER_SIZE

    def __init__(self, space: Optional['Space'], buffer: Buffer):
        if len(buffer) < self.MIN_PAGE_SIZE:
            raise MalformedPage(
                f"page buffer of {len(buffer)} bytes is shorter than the "
                f"{self.MIN_PAGE_SIZE}-byte FIL header and trailer")
        self.space = space
        self._buffer = bytes(buffer)
        self._size: Optional[int] = None
        self._fil_header: Optional[FilHeader] = None
        self._fil_trailer: Optional[FilTrailer] = None

    @classmethod
    def load(cls, space: Optional['Space'], buffer: Buffer,
             registry: Optional[PageTypeRegistry] = None) -> 'Page':
        """
        先按通用页解析 FIL 头拿到类型码，若注册表中有专用类，
        则用同一缓冲区和表空间重新构造为该类。
        """
        page = Page(space, buffer)
        table = registry if registry is not None else PAGE_TYPE_REGISTRY
        specialized = table.lookup(page.fil_header().type_code)
        if specialized is None:
            return page
        logger.debug(f"page {page.offset}: type {page.type} handled by {specialized.__name__}")
        return specialized(space, buffer)

    @property
    def size(self) -> int:
        if self._size is None:
            self._size = len(self._buffer)
        return self._size

    def raw_bytes(self, offset: int, length: int) -> bytes:
        """返回 [offset, offset+length)，要求 0 <= offset 且 offset+length <= size。"""
        if offset < 0 or length < 0 or offset + length > self.size:
            raise PageOutOfRange(offset, length, self.size)
        return self._buffer[offset:offset + length]

    def cursor(self, offset: int) -> ByteCursor:
        return ByteCursor(self._buffer, offset)

    def pos_fil_header(self) -> int:
        return 0

    def size_fil_header(self) -> int:
        return self.FIL_HEADER_SIZE

    def pos_fil_trailer(self) -> int:
        return self.size - self.size_fil_trailer()

    def size_fil_trailer(self) -> int:
        return self.FIL_TRAILER_SIZE

    def _read_fil_header(self) -> FilHeader:
        c = self.cursor(self.pos_fil_header())
        checksum = c.read_uint32()
        offset = c.read_uint32()
        prev = maybe_undefined(c.read_uint32())
        next_ = maybe_undefined(c.read_uint32())
        lsn = c.read_uint64()
        type_code = c.read_uint16()
        flush_lsn = c.read_uint64()
        space_id = c.read_uint32()
        return FilHeader(
            checksum=checksum,
            offset=offset,
            prev=prev,
            next=next_,
            lsn=lsn,
            page_type=page_type_for(type_code),
            type_code=type_code,
            flush_lsn=flush_lsn,
            space_id=space_id,
        )

    def fil_header(self) -> FilHeader:
        # 缓冲区不可变，并发下重复计算结果相同，只做整体赋值
        if self._fil_header is None:
            self._fil_header = self._read_fil_header()
        return self._fil_header

    def fil_trailer(self) -> FilTrailer:
        """FIL 尾只做解码，不校验 checksum。"""
        if self._fil_trailer is None:
            c = self.cursor(self.pos_fil_trailer())
            self._fil_trailer = FilTrailer(checksum=c.read_uint32(), lsn_low32=c.read_uint32())
        return self._fil_trailer

    @property
    def type(self) -> PageKind:
        return self.fil_header().page_type

    @property
    def offset(self) -> int:
        return self.fil_header().offset

    @property
    def prev(self) -> Optional[int]:
        return self.fil_header().prev

    @property
    def next(self) -> Optional[int]:
        return self.fil_header().next

    @property
    def lsn(self) -> int:
        return self.fil_header().lsn

    @property
    def flush_lsn(self) -> int:
        return self.fil_header().flush_lsn

    @property
    def space_id(self) -> int:
        return self.fil_header().space_id

    def describe(self) -> str:
        header = self.fil_header()
        return "<%s: size=%i, space_id=%i, offset=%i, type=%s, prev=%s, next=%s>" % (
            type(self).__name__,
            self.size,
            header.space_id,
            header.offset,
            header.page_type.name,
            "none" if header.prev is None else header.prev,
            "none" if header.next is None else header.next,
        )

    def __repr__(self) -> str:
        # 不打印整个缓冲区
        return self.describe()

    def dump(self, console: Optional[Console] = None) -> None:
        """调试用：以表格形式输出 FIL 头和 FIL 尾。"""
        console = console or Console()
        console.print(self.describe())
        table = Table(title="fil header", box=box.SIMPLE)
        table.add_column("field", style="cyan")
        table.add_column("value", justify="right")
        header = self.fil_header()
        rows = [
            ("checksum", header.checksum),
            ("offset", header.offset),
            ("prev", header.prev),
            ("next", header.next),
            ("lsn", header.lsn),
            ("type", header.page_type.name),
            ("flush_lsn", header.flush_lsn),
            ("space_id", header.space_id),
        ]
        for name, value in rows:
            table.add_row(name, "none" if value is None else str(value))
        console.print(table)
        trailer = self.fil_trailer()
        console.print(f"fil trailer: checksum={trailer.checksum} lsn_low32={trailer.lsn_low32}")
