"""Tests for the in-memory message broker"""
import pytest
import pytest_asyncio
from unittest.mock import AsyncMock, patch

from user_events.core.errors import TransportFailure
from user_events.messaging.i_message_broker import ChannelMetadata
from user_events.messaging.memory_broker import InMemoryBroker, partition_for


class TestPartitioning:
    """Test key to partition assignment"""

    def test_partition_is_stable(self):
        """Test that the same key always maps to the same partition"""
        assert partition_for("user-1", 3) == partition_for("user-1", 3)

    def test_partition_in_range(self):
        """Test that partitions stay within bounds"""
        for i in range(50):
            assert 0 <= partition_for(f"user-{i}", 3) < 3

    def test_partitions_must_be_positive(self):
        """Test that a broker needs at least one partition"""
        with pytest.raises(ValueError):
            InMemoryBroker(partitions=0)


class TestInMemoryBroker:
    """Test publish and subscribe"""

    @pytest_asyncio.fixture
    async def broker(self):
        broker = InMemoryBroker(partitions=3)
        await broker.connect()
        return broker

    @pytest.mark.asyncio
    async def test_publish_requires_connect(self):
        """Test that publishing before connect fails"""
        with pytest.raises(TransportFailure):
            await InMemoryBroker().publish("topic", "key", b"{}")

    @pytest.mark.asyncio
    async def test_offsets_increase_per_partition(self, broker):
        """Test that a key's messages get consecutive offsets"""
        first = await broker.publish("topic", "user-1", b"a")
        second = await broker.publish("topic", "user-1", b"b")

        assert first.partition == second.partition == partition_for("user-1", 3)
        assert (first.offset, second.offset) == (0, 1)

    @pytest.mark.asyncio
    async def test_offsets_are_per_topic(self, broker):
        """Test that topics keep separate offsets"""
        await broker.publish("topic-a", "user-1", b"a")
        result = await broker.publish("topic-b", "user-1", b"b")

        assert result.offset == 0

    @pytest.mark.asyncio
    async def test_every_group_receives_every_message(self, broker):
        """Test fan-out to consumer groups"""
        first_group = AsyncMock()
        second_group = AsyncMock()
        await broker.subscribe("topic", "group-1", first_group)
        await broker.subscribe("topic", "group-2", second_group)

        await broker.publish("topic", "user-1", b"payload")

        first_group.assert_awaited_once()
        second_group.assert_awaited_once()
        payload, channel_metadata = first_group.call_args[0]
        assert payload == b"payload"
        assert isinstance(channel_metadata, ChannelMetadata)
        assert channel_metadata.key == "user-1"

    @pytest.mark.asyncio
    async def test_other_topics_are_not_delivered(self, broker):
        """Test that subscribers only see their topic"""
        handler = AsyncMock()
        await broker.subscribe("topic-a", "group", handler)

        await broker.publish("topic-b", "user-1", b"payload")

        handler.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_failing_subscriber_does_not_fail_publish(self, broker):
        """Test that subscriber errors are logged and the publish still succeeds"""
        await broker.subscribe("topic", "group", AsyncMock(side_effect=RuntimeError("boom")))

        with patch("user_events.messaging.memory_broker.logger") as mock_logger:
            result = await broker.publish("topic", "user-1", b"payload")

        assert result.offset == 0
        mock_logger.error.assert_called_once()

    @pytest.mark.asyncio
    async def test_disconnect(self, broker):
        """Test that disconnect drops subscriptions and health"""
        await broker.subscribe("topic", "group", AsyncMock())

        await broker.disconnect()

        assert not broker.is_healthy()
        assert not broker.subscriptions

    @pytest.mark.asyncio
    async def test_published_payloads_are_not_retained(self, broker):
        """Test that publishing only bumps counters and keeps no payloads"""
        for i in range(1000):
            await broker.publish("topic", f"user-{i}", b"x" * 100)

        assert broker.message_counts == {"topic": 1000}
        assert not hasattr(broker, "records")

    @pytest.mark.asyncio
    async def test_stats(self, broker):
        """Test message counts in the stats"""
        await broker.subscribe("topic", "group", AsyncMock())
        await broker.publish("topic", "user-1", b"a")
        await broker.publish("topic", "user-2", b"b")

        stats = await broker.get_stats()

        assert stats["broker"] == "memory"
        assert stats["connected"] is True
        assert stats["messages"] == {"topic": 2}
        assert stats["subscriptions"] == {"topic": ["group"]}
