from ttlshortener.models.link_record_model import LinkRecordModel, RegistryStats


__all__ = [
    'LinkRecordModel',
    'RegistryStats',
]
