"""External file storage package."""

from taskstation.storage.base import FileStorage
from taskstation.storage.s3 import S3FileStorage

__all__ = [
    "FileStorage",
    "S3FileStorage",
]
