"""
语料读取工具包

- 纯文本文件 (任意扩展名，按文件名排序读取)
"""

from .corpus import CorpusDocument, load_corpus
from .readers_base import BaseParser
from .readers_text import TextParser

__all__ = [
    'BaseParser',
    'CorpusDocument',
    'TextParser',
    'load_corpus',
]
