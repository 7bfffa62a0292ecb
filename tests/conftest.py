"""Shared test fixtures"""
import pytest
from datetime import datetime

from user_events.messaging.i_message_broker import ChannelMetadata
from user_events.models import UserEvent, UserEventBean


@pytest.fixture
def event_timestamp():
    """Fixed second-precision timestamp"""
    return datetime(2024, 1, 1, 12, 0, 0)


@pytest.fixture
def sample_metadata():
    """Metadata of a typical login event"""
    return {"ip": "192.168.1.1", "userAgent": "Chrome/120.0"}


@pytest.fixture
def login_event(event_timestamp, sample_metadata):
    """Sample immutable login event"""
    return UserEvent.of("test-user-123", "LOGIN", event_timestamp, sample_metadata)


@pytest.fixture
def login_bean(event_timestamp, sample_metadata):
    """Sample mutable login event"""
    return UserEventBean.of("test-user-123", "LOGIN", event_timestamp, dict(sample_metadata))


@pytest.fixture
def logout_payload():
    """Wire payload of a logout event"""
    return b"""
    {
        "userId": "test-user-456",
        "eventType": "LOGOUT",
        "timestamp": "2024-01-01T15:30:00",
        "metadata": {"ip": "10.0.0.1", "sessionDuration": 3600}
    }
    """


@pytest.fixture
def channel_metadata():
    """Delivery metadata of a consumed message"""
    return ChannelMetadata(topic="user-events-record", partition=1, offset=42, key="test-user-456")
