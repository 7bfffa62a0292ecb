from .services import get_broker, get_consumers, get_pojo_producer, get_record_producer

__all__ = ["get_broker", "get_consumers", "get_pojo_producer", "get_record_producer"]
