"""
Travel Relay — Abstract Object Storage Interface
==================================================

What:  Contract for the object store that receives uploaded trip images.
How:   Concrete implementations inherit from ObjectStorage and implement
       put_object(). The upload route only sees this interface.
Who:   ImageUploadService during /upload-image.

Implementations:
    - S3ObjectStorage: Amazon S3 through aiobotocore (services/storage.py)
    - Tests supply an in-memory fake
"""

from abc import ABC, abstractmethod


class ObjectStorage(ABC):
    """
    Abstract interface for storing an object and exposing it publicly.

    Contract:
        - put_object() stores exactly the bytes given, under exactly the key given
        - One call means one write; implementations do not retry
        - Failures raise an exception; the caller converts it to a 500
    """

    @abstractmethod
    async def put_object(self, key: str, body: bytes, content_type: str) -> str:
        """
        Store an object.

        Args:
            key:           Object key (the caller's file name, unchanged)
            body:          Raw object bytes
            content_type:  MIME type recorded on the object

        Returns:
            str: Public URL of the stored object.
        """
        ...
