"""Abstract base class for external file storage."""

from abc import ABC, abstractmethod
from typing import BinaryIO


class FileStorage(ABC):
    """Object store that keeps file bytes and hands back a URL.

    Implementations own their failure modes (network errors, missing
    buckets); callers do not retry.
    """

    @abstractmethod
    async def upload(self, stream: BinaryIO, file_name: str, content_type: str) -> str:
        """Upload a file.

        Args:
            stream: Binary stream positioned at the start of the content.
            file_name: Original file name, used for the object extension.
            content_type: MIME type stored with the object.

        Returns:
            Public URL of the stored object.
        """
