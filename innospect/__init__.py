"""
innospect：InnoDB 表空间页面的只读结构解码器。

子包：
- storage: 页面框架头/尾、页类型注册表、记录模型、表空间文件读取
"""

__version__ = "0.1.0"
