"""
纯文本解析器 - 自动尝试多种编码读取整个文件内容
"""

from typing import Optional

from neardup.core.logging import get_logger
from .readers_base import BaseParser

logger = get_logger(__name__)

# latin-1 能解码任意字节序列，放在最后兜底
ENCODINGS = ("utf-8-sig", "cp1252", "latin-1")


class TextParser(BaseParser):
    """
    Parser for plain text files.

    The file is read whole; no normalization is applied, since documents are
    compared character by character.
    """

    def __init__(self, encodings=ENCODINGS):
        self.encodings = tuple(encodings)

    def parse(self, file_path: str) -> Optional[str]:
        """
        Read a text file, trying each configured encoding in turn.

        Returns:
            File content as string or None if the file cannot be read
        """
        try:
            with open(file_path, "rb") as f:
                raw_content = f.read()
        except OSError as e:
            logger.error("text_read_failed", path=file_path, error=str(e))
            return None

        for encoding in self.encodings:
            try:
                return raw_content.decode(encoding)
            except UnicodeDecodeError:
                continue

        logger.error("text_decode_failed", path=file_path, encodings=list(self.encodings))
        return None
