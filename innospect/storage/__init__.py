"""
Storage 子系统：页面解码与记录模型。

模块清单：
- cursor: 基于偏移的大端整数读取器
- page: 通用页与 FIL 头/尾
- registry: 页类型码 -> 专用解码类
- record: 记录字段模型
- space: 表空间文件（只读）
"""

from .errors import MalformedPage, MalformedRecord, PageError, PageOutOfRange, PageReleased
from .cursor import ByteCursor
from .registry import PAGE_TYPE_REGISTRY, PageTypeRegistry, register_page_type
from .page import FilHeader, FilTrailer, Page, PageType, UnknownPageType, maybe_undefined
from .record import Field, Record, RecordData
from .space import Space

__all__ = [
    "PageError",
    "MalformedPage",
    "PageOutOfRange",
    "MalformedRecord",
    "PageReleased",
    "ByteCursor",
    "PageTypeRegistry",
    "PAGE_TYPE_REGISTRY",
    "register_page_type",
    "Page",
    "PageType",
    "UnknownPageType",
    "FilHeader",
    "FilTrailer",
    "maybe_undefined",
    "Field",
    "Record",
    "RecordData",
    "Space",
]
