"""Interface for turning stored values into bytes and back."""

import abc
from typing import Any


class Serializer(abc.ABC):
    """Abstract Base Class for value <-> bytes conversion."""

    @abc.abstractmethod
    def serialize(self, value: Any) -> bytes:
        """Converts a value into an opaque byte sequence.

        Raises:
            SerializationError: If the value cannot be encoded.
        """
        pass

    @abc.abstractmethod
    def deserialize(self, data: bytes) -> Any:
        """Converts bytes produced by serialize() back into a value.

        Raises:
            SerializationError: If the bytes cannot be decoded.
        """
        pass
