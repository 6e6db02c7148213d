"""Data models for zfskit."""
from zfskit.models.dataset import Dataset, DatasetType, DestroyFlag, join_types
from zfskit.models.entity import Entity
from zfskit.models.options import CreateDatasetOptions, CreatePoolOptions, ImportPoolOptions
from zfskit.models.pool import Pool, PoolHealth

__all__ = [
    'CreateDatasetOptions',
    'CreatePoolOptions',
    'Dataset',
    'DatasetType',
    'DestroyFlag',
    'Entity',
    'ImportPoolOptions',
    'Pool',
    'PoolHealth',
    'join_types',
]
