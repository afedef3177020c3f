"""
记录字段模型。

专用页解码器负责从字节中解析出记录结构（RecordData），
Record 只负责展示这些已解码的字段，不会重新解析字节。
- 叶子记录：key + row
- 内部节点记录：key + child_page_number
"""

import weakref
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Dict, List, Optional, Sequence

from loguru import logger

from .errors import MalformedRecord, PageReleased

if TYPE_CHECKING:
    from .page import Page


@dataclass(frozen=True)
class Field:
    """一列已解码的值，position 为该列在所属字段组中的序号。"""
    name: str
    value: Any
    position: int
    type_name: Optional[str] = None


@dataclass
class RecordData:
    header: Any
    offset: int
    next: Optional[int]
    key: List[Field]
    row: Optional[List[Field]] = None
    child_page_number: Optional[int] = None


def describe_fields(fields: Optional[Sequence[Field]]) -> Optional[str]:
    if fields is None:
        return None
    return ", ".join("%s=%r" % (f.name, f.value) for f in fields)


class Record:
    def __init__(self, page: 'Page', record: RecordData):
        has_row = record.row is not None
        has_child = record.child_page_number is not None
        if has_row == has_child:
            raise MalformedRecord(
                f"record at offset {record.offset} must carry either a row or a "
                f"child page number (row={has_row}, child={has_child})")
        self._page = weakref.ref(page)
        self.record = record
        self._fields: Optional[Dict[str, Any]] = None

    @property
    def page(self) -> 'Page':
        page = self._page()
        if page is None:
            raise PageReleased(f"page owning record at offset {self.offset} has been released")
        return page

    @property
    def header(self) -> Any:
        return self.record.header

    @property
    def offset(self) -> int:
        return self.record.offset

    @property
    def next(self) -> Optional[int]:
        return self.record.next

    @property
    def key(self) -> List[Field]:
        return self.record.key

    @property
    def row(self) -> Optional[List[Field]]:
        return self.record.row

    @property
    def child_page_number(self) -> Optional[int]:
        return self.record.child_page_number

    @property
    def is_leaf(self) -> bool:
        return self.record.child_page_number is None

    def describe_key(self) -> str:
        return describe_fields(self.key) or ""

    def describe_row(self) -> Optional[str]:
        return describe_fields(self.row)

    def describe(self) -> str:
        if self.child_page_number is not None:
            return "(%s) → #%s" % (self.describe_key(), self.child_page_number)
        return "(%s) → (%s)" % (self.describe_key(), self.describe_row())

    def _merge_fields(self) -> Dict[str, Any]:
        merged: Dict[str, Any] = {}
        for f in self.key:
            merged[f.name] = f.value
        for f in self.row or []:
            # 同名时 row 覆盖 key
            if f.name in merged:
                logger.warning(f"record at offset {self.offset}: row field {f.name!r} shadows key field")
            merged[f.name] = f.value
        return merged

    def fields(self) -> Dict[str, Any]:
        """key 与 row 合并后的 name -> value 视图。"""
        if self._fields is None:
            self._fields = self._merge_fields()
        return self._fields

    def __repr__(self) -> str:
        return f"<Record offset={self.offset} {self.describe()}>"
