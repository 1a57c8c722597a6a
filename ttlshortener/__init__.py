from ttlshortener.dao import LinkBaseDAO, LinkMemoryDAO
from ttlshortener.models import LinkRecordModel, RegistryStats


__all__ = [
    'LinkBaseDAO',
    'LinkMemoryDAO',
    'LinkRecordModel',
    'RegistryStats',
]
