import os
from typing import Iterator, Optional

from loguru import logger

from innospect.config import DEFAULT_PAGE_SIZE
from .errors import MalformedPage, PageOutOfRange
from .page import Page
from .registry import PageTypeRegistry


class Space:
    """
    只读的表空间文件（如 ibdata1 或 *.ibd），按固定页大小切分并交给 Page.load 解码。
    页号从 0 开始，第 n 页位于文件偏移 n * page_size。
    """

    def __init__(self, path: str, page_size: int = DEFAULT_PAGE_SIZE,
                 registry: Optional[PageTypeRegistry] = None):
        self._file = None
        if page_size < Page.MIN_PAGE_SIZE or page_size % 1024 != 0:
            raise ValueError(f"page size {page_size} must be a positive multiple of 1024")
        self.path = path
        self.page_size = page_size
        self.registry = registry
        file_size = os.path.getsize(path)
        if file_size % page_size != 0:
            raise MalformedPage(
                f"{path}: file size {file_size} is not a multiple of page size {page_size}")
        self.page_count = file_size // page_size
        self._file = open(path, 'rb')
        logger.debug(f"opened space {path}: {self.page_count} pages of {page_size} bytes")

    def _get_page_offset(self, page_number: int) -> int:
        if page_number < 0 or page_number >= self.page_count:
            raise PageOutOfRange(page_number * self.page_size, self.page_size,
                                 self.page_count * self.page_size)
        return page_number * self.page_size

    def read_page(self, page_number: int) -> bytes:
        if self._file is None:
            raise ValueError(f"space {self.path} is closed")
        offset = self._get_page_offset(page_number)
        self._file.seek(offset)
        data = self._file.read(self.page_size)
        if len(data) != self.page_size:
            # 文件在打开后被截断
            raise PageOutOfRange(offset, self.page_size, offset + len(data))
        return data

    def page(self, page_number: int) -> Page:
        return Page.load(self, self.read_page(page_number), registry=self.registry)

    def each_page(self) -> Iterator[Page]:
        for page_number in range(self.page_count):
            yield self.page(page_number)

    def close(self) -> None:
        if self._file and not self._file.closed:
            self._file.close()
        self._file = None

    def __enter__(self) -> 'Space':
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def __del__(self):
        self.close()

    def __repr__(self) -> str:
        return f"<Space path={self.path!r} page_size={self.page_size} pages={self.page_count}>"
