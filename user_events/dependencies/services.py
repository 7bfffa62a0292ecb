"""
Service layer dependency injection for FastAPI.

The broker, producers and consumers are built once in the application
lifespan and kept on app.state; these dependencies hand them to routes.
"""

from typing import Dict

from fastapi import Request

from user_events.consumer.consumer import UserEventConsumer
from user_events.messaging.i_message_broker import IMessageBroker
from user_events.services.event_producer import UserEventProducer


def get_broker(request: Request) -> IMessageBroker:
    """FastAPI dependency returning the connected message broker"""
    return request.app.state.broker


def get_record_producer(request: Request) -> UserEventProducer:
    """FastAPI dependency returning the producer for immutable (record) events"""
    return request.app.state.record_producer


def get_pojo_producer(request: Request) -> UserEventProducer:
    """FastAPI dependency returning the producer for mutable (bean) events"""
    return request.app.state.pojo_producer


def get_consumers(request: Request) -> Dict[str, UserEventConsumer]:
    """FastAPI dependency returning the consumers keyed by topic"""
    return request.app.state.consumers
