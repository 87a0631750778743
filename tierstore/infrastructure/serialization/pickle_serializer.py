"""Serializer implementation backed by the standard pickle module.

Pickle gives a byte-exact round trip for any picklable Python value, which
matches what the file and Redis backends need: the stored bytes are opaque
and written without any header or checksum.
"""

import logging
import pickle
from typing import Any

from tierstore.domain.exceptions import SerializationError
from tierstore.domain.interfaces.serializer import Serializer

logger = logging.getLogger(__name__)


class PickleSerializer(Serializer):
    """Serializes values with pickle."""

    def __init__(self, protocol: int = pickle.HIGHEST_PROTOCOL):
        self.protocol = protocol

    def serialize(self, value: Any) -> bytes:
        try:
            return pickle.dumps(value, protocol=self.protocol)
        except (pickle.PicklingError, TypeError, AttributeError) as e:
            raise SerializationError(f"Cannot serialize value of type {type(value).__name__}: {e}") from e

    def deserialize(self, data: bytes) -> Any:
        try:
            return pickle.loads(data)
        except Exception as e:  # corrupt input can raise almost anything from pickle.loads
            raise SerializationError(f"Cannot deserialize {len(data)} bytes: {e}") from e
