"""
全局配置常量与日志初始化。
"""

import os
import sys

from loguru import logger

# InnoDB 默认页大小 16KB
DEFAULT_PAGE_SIZE = 16384
# 页头 prev/next 字段中表示“无链接”的保留值
UNDEFINED_PAGE_NUMBER = 0xFFFFFFFF

LOG_LEVEL = os.environ.get("INNOSPECT_LOG_LEVEL", "WARNING")


def configure_logging(level: str = LOG_LEVEL) -> int:
    """替换 loguru 默认输出，只保留指定级别以上的 stderr 日志。返回 sink id。"""
    logger.remove()
    return logger.add(sys.stderr, level=level)
