"""Tests for the user event wire codec"""
import json
import pytest
from datetime import datetime

from user_events.core.errors import DeserializationFailure, InvalidArgument
from user_events.models import UserEvent, UserEventBean
from user_events.services.event_codec import UserEventCodec, bean_codec, decode, encode


class TestEncode:
    """Test serialization to the wire format"""

    def test_record_serialization(self, login_event):
        """Test that a record serializes with wire field names"""
        document = json.loads(encode(login_event))

        assert document == {
            "userId": "test-user-123",
            "eventType": "LOGIN",
            "timestamp": "2024-01-01T12:00:00",
            "metadata": {"ip": "192.168.1.1", "userAgent": "Chrome/120.0"},
        }

    def test_bean_serialization(self, login_bean):
        """Test that a bean serializes to the same document as a record"""
        assert json.loads(encode(login_bean)) == json.loads(encode(login_bean.to_record()))

    def test_sub_second_precision_is_truncated(self):
        """Test that microseconds are dropped on the wire"""
        event = UserEvent.of("user", "LOGIN", datetime(2024, 1, 1, 12, 0, 0, 987654))

        assert json.loads(encode(event))["timestamp"] == "2024-01-01T12:00:00"

    def test_null_metadata(self, event_timestamp):
        """Test that missing metadata is written as null"""
        event = UserEvent.of("user", "LOGIN", event_timestamp)

        assert json.loads(encode(event))["metadata"] is None

    def test_empty_bean_serialization(self):
        """Test that an empty bean encodes with null fields"""
        document = json.loads(encode(UserEventBean()))

        assert document == {"userId": None, "eventType": None, "timestamp": None, "metadata": None}


class TestDecode:
    """Test deserialization from the wire format"""

    @pytest.mark.parametrize("model", [UserEvent, UserEventBean])
    def test_deserialization(self, model, logout_payload):
        """Test that both models decode a valid payload"""
        event = decode(logout_payload, model)

        assert isinstance(event, model)
        assert event.user_id == "test-user-456"
        assert event.event_type == "LOGOUT"
        assert event.timestamp == datetime(2024, 1, 1, 15, 30, 0)
        assert event.metadata["ip"] == "10.0.0.1"
        assert event.metadata["sessionDuration"] == 3600

    def test_decode_accepts_text(self, logout_payload):
        """Test that str payloads are accepted"""
        assert decode(logout_payload.decode("utf-8")).user_id == "test-user-456"

    def test_decode_normalizes(self):
        """Test that decoding applies construction normalization"""
        event = decode('{"userId": " bob ", "eventType": "login", "timestamp": "2024-01-01T12:00:00"}')

        assert event.user_id == "bob"
        assert event.event_type == "LOGIN"
        assert event.metadata is None

    def test_null_metadata_is_accepted(self):
        """Test that metadata may be null"""
        event = decode(
            '{"userId": "bob", "eventType": "LOGIN", "timestamp": "2024-01-01T12:00:00", "metadata": null}'
        )

        assert event.metadata is None

    @pytest.mark.parametrize("model", [UserEvent, UserEventBean])
    @pytest.mark.parametrize(
        "payload, field",
        [
            ('{"eventType": "LOGIN", "timestamp": "2024-01-01T12:00:00"}', "userId"),
            ('{"userId": "  ", "eventType": "LOGIN", "timestamp": "2024-01-01T12:00:00"}', "userId"),
            ('{"userId": "bob", "eventType": "", "timestamp": "2024-01-01T12:00:00"}', "eventType"),
            ('{"userId": "bob", "eventType": "LOGIN"}', "timestamp"),
            ('{}', "userId"),
        ],
    )
    def test_invariant_violations(self, model, payload, field):
        """Test that payloads violating invariants fail for both models"""
        with pytest.raises(DeserializationFailure) as exc_info:
            decode(payload, model)

        assert exc_info.value.details["field"] == field
        assert isinstance(exc_info.value.__cause__, InvalidArgument)

    @pytest.mark.parametrize(
        "payload",
        [
            b"not json",
            b"[1, 2, 3]",
            b'"just a string"',
            b'{"userId": "bob", "eventType": "LOGIN", "timestamp": "yesterday"}',
            b'{"userId": "bob", "eventType": "LOGIN", "timestamp": "2024-01-01T12:00:00", "metadata": [1]}',
            b'{"user_id": "bob", "event_type": "login", "timestamp": "2024-01-01T12:00:00"}',
            b'{"userId": "bob", "eventType": "LOGIN", "timestamp": 1704110400}',
            b'{"userId": "bob", "eventType": "LOGIN", "timestamp": "2024-01-01"}',
            b'{"userId": "bob", "eventType": "LOGIN", "timestamp": "2024-01-01T12:00:00+02:00"}',
            b'{"userId": "bob", "eventType": "LOGIN", "timestamp": "2024-01-01T12:00:00.500"}',
        ],
    )
    @pytest.mark.parametrize("model", [UserEvent, UserEventBean])
    def test_malformed_payloads(self, model, payload):
        """Test that malformed payloads raise DeserializationFailure"""
        with pytest.raises(DeserializationFailure):
            decode(payload, model)

    @pytest.mark.parametrize(
        "payload",
        [
            b'{"userId": "bob", "eventType": "LOGIN", "timestamp": 1704110400}',
            b'{"userId": "bob", "eventType": "LOGIN", "timestamp": "2024-01-01"}',
        ],
    )
    def test_timestamp_must_use_wire_format(self, payload):
        """Test that only "yyyy-MM-ddTHH:mm:ss" strings are accepted as timestamps"""
        with pytest.raises(DeserializationFailure) as exc_info:
            decode(payload)

        assert exc_info.value.details["field"] == "timestamp"

    def test_field_names_are_exact(self):
        """Test that attribute names are not accepted in place of wire names"""
        with pytest.raises(DeserializationFailure) as exc_info:
            decode(b'{"user_id": "bob", "event_type": "login", "timestamp": "2024-01-01T12:00:00"}')

        assert exc_info.value.details["field"] == "userId"

    def test_unsupported_payload_type(self):
        """Test that non-text payloads are rejected"""
        with pytest.raises(DeserializationFailure):
            decode(None)


class TestRoundTrip:
    """Test encode then decode"""

    def test_bob_scenario(self):
        """Test the round trip of a normalized login event"""
        original = UserEvent.of("  bob  ", "login", datetime(2024, 1, 1, 12, 0, 0), {"ip": "1.2.3.4"})

        decoded = decode(encode(original))

        assert decoded == original
        assert decoded.is_login_event()
        assert decoded.metadata_value("ip") == "1.2.3.4"

    def test_round_trip_truncates_to_seconds(self):
        """Test that only sub-second precision is lost"""
        original = UserEvent.of("user", "LOGIN", datetime(2024, 1, 1, 12, 0, 0, 500000), {"n": 1})

        decoded = decode(encode(original))

        assert decoded.user_id == original.user_id
        assert decoded.event_type == original.event_type
        assert decoded.metadata == original.metadata
        assert decoded.timestamp == original.timestamp.replace(microsecond=0)

    def test_bean_round_trip(self, login_bean):
        """Test the round trip through the bean codec"""
        assert bean_codec.decode(bean_codec.encode(login_bean)) == login_bean

    def test_codec_bound_to_model(self, logout_payload):
        """Test that a codec decodes into its model"""
        codec = UserEventCodec(UserEventBean)

        assert isinstance(codec.decode(logout_payload), UserEventBean)
