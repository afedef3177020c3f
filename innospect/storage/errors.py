"""页面解码相关异常。"""


class PageError(Exception):
    """所有页面解码错误的基类。"""
    pass


class MalformedPage(PageError):
    """页缓冲区结构无效，例如长度不足以容纳 FIL 头和尾。"""
    pass


class PageOutOfRange(MalformedPage):
    """读取范围超出页缓冲区边界。"""

    def __init__(self, offset: int, length: int, size: int):
        self.offset = offset
        self.length = length
        self.size = size
        super().__init__(f"range [{offset}, {offset + length}) is outside page of {size} bytes")


class MalformedRecord(PageError):
    """记录必须且只能携带 row 或 child_page_number 其中之一。"""
    pass


class PageReleased(PageError):
    """记录所属的页已经被释放。"""
    pass
