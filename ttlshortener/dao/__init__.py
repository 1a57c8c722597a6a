from ttlshortener.dao.base import LinkBaseDAO
from ttlshortener.dao.memory import LinkMemoryDAO


__all__ = [
    'LinkBaseDAO',
    'LinkMemoryDAO',
]
