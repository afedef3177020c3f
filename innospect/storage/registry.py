"""
页类型注册表：页类型码 -> 专用解码类。

专用页类在模块导入时通过 register_page_type 注册自己，
Page.load 读到 FIL 头里的类型码后查询这里决定用哪个类重新构造页。
"""

from typing import TYPE_CHECKING, Callable, Dict, List, Optional, Type
from loguru import logger

if TYPE_CHECKING:
    from .page import Page

MAX_TYPE_CODE = 0xFFFF


def _check_code(type_code: int) -> int:
    if isinstance(type_code, bool) or not isinstance(type_code, int):
        raise ValueError(f"page type code must be an integer, got {type_code!r}")
    if type_code < 0 or type_code > MAX_TYPE_CODE:
        raise ValueError(f"page type code {type_code} is not an unsigned 16-bit value")
    return int(type_code)


class PageTypeRegistry:
    """
    类型码到解码类的映射，键唯一，重复注册时后者覆盖前者。
    本身不含任何解码逻辑。
    """

    def __init__(self) -> None:
        self._classes: Dict[int, Type['Page']] = {}

    def register(self, type_code: int, page_cls: Type['Page']) -> None:
        code = _check_code(type_code)
        previous = self._classes.get(code)
        if previous is not None and previous is not page_cls:
            logger.debug(f"page type {code}: {previous.__name__} replaced by {page_cls.__name__}")
        else:
            logger.debug(f"page type {code} registered to {page_cls.__name__}")
        self._classes[code] = page_cls

    def unregister(self, type_code: int) -> Optional[Type['Page']]:
        return self._classes.pop(_check_code(type_code), None)

    def lookup(self, type_code: int) -> Optional[Type['Page']]:
        return self._classes.get(type_code)

    def codes(self) -> List[int]:
        return sorted(self._classes)

    def __contains__(self, type_code: object) -> bool:
        return type_code in self._classes

    def __len__(self) -> int:
        return len(self._classes)

    def __repr__(self) -> str:
        return f"<PageTypeRegistry codes={self.codes()}>"


# 进程级默认注册表
PAGE_TYPE_REGISTRY = PageTypeRegistry()


def register_page_type(type_code: int, registry: Optional[PageTypeRegistry] = None) -> Callable[[Type['Page']], Type['Page']]:
    """类装饰器：把专用页类注册到指定（默认全局）注册表。"""
    target = registry if registry is not None else PAGE_TYPE_REGISTRY

    def decorator(page_cls: Type['Page']) -> Type['Page']:
        target.register(type_code, page_cls)
        return page_cls

    return decorator
