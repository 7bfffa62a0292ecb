"""
Service layer: codec, producer and benchmarks
"""

from .event_codec import UserEventCodec, bean_codec, decode, encode, record_codec
from .event_producer import UserEventProducer

__all__ = [
    "UserEventCodec",
    "UserEventProducer",
    "bean_codec",
    "decode",
    "encode",
    "record_codec",
]
