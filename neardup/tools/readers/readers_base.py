"""
文档解析器基类 - 极简设计

单一职责：只定义解析接口
"""

from abc import ABC, abstractmethod
from typing import Optional


class BaseParser(ABC):
    """
    极简的文档解析器基类

    1. Do one thing well - 只负责定义解析接口
    2. KISS - 只有一个必需的方法
    """

    @abstractmethod
    def parse(self, file_path: str) -> Optional[str]:
        """
        解析文档并提取纯文本内容。

        Args:
            file_path: 文档文件路径

        Returns:
            提取的纯文本内容，解析失败时返回None
        """
        pass
