"""
Dapr Broker Implementation
Publishes through the Dapr sidecar's pub/sub HTTP API

Dapr pushes subscribed messages to the application over HTTP (see
user_events.routers.dapr_router), so subscribing here only records the
handler. Dapr does not report partitions or offsets.
"""

from typing import Any, Dict, Optional

import httpx

from user_events.core.config import config
from user_events.core.errors import TransportFailure
from user_events.core.logger import logger
from user_events.utils.correlation_id import get_correlation_id
from .i_message_broker import DeliveryResult, IMessageBroker, MessageHandler


class DaprBroker(IMessageBroker):
    """Dapr pub/sub implementation of IMessageBroker"""

    def __init__(self, dapr_http_port: int, pubsub_name: str, timeout: float = 5.0):
        self.dapr_http_port = dapr_http_port
        self.pubsub_name = pubsub_name
        self.dapr_url = f"http://localhost:{dapr_http_port}"
        self.timeout = timeout
        self.subscriptions: Dict[str, Dict[str, MessageHandler]] = {}
        self._client: Optional[httpx.AsyncClient] = None

    async def connect(self) -> None:
        self._client = httpx.AsyncClient(base_url=self.dapr_url, timeout=self.timeout)
        logger.info(
            "Dapr broker initialized",
            metadata={"daprUrl": self.dapr_url, "daprPubSubName": self.pubsub_name}
        )

    async def publish(self, topic: str, key: str, payload: bytes) -> DeliveryResult:
        if self._client is None:
            raise TransportFailure("Dapr broker is not connected", details={"topic": topic})

        # Dapr publish endpoint: POST /v1.0/publish/{pubsubname}/{topic}
        publish_path = f"/v1.0/publish/{self.pubsub_name}/{topic}"

        headers = {"Content-Type": "application/json"}
        correlation_id = get_correlation_id()
        if correlation_id:
            headers[config.correlation_id_header] = correlation_id

        try:
            response = await self._client.post(
                publish_path,
                content=payload,
                params={"metadata.partitionKey": key},
                headers=headers,
            )
        except httpx.TimeoutException as e:
            raise TransportFailure(
                f"Timeout publishing to Dapr topic {topic}",
                details={"topic": topic, "daprUrl": self.dapr_url}
            ) from e
        except httpx.HTTPError as e:
            raise TransportFailure(
                f"Cannot reach Dapr sidecar: {e}",
                details={
                    "topic": topic,
                    "daprUrl": self.dapr_url,
                    "hint": f"Ensure Dapr sidecar is running on port {self.dapr_http_port}",
                }
            ) from e

        if response.status_code not in (200, 204):
            raise TransportFailure(
                f"Dapr rejected message for topic {topic}",
                details={"topic": topic, "statusCode": response.status_code, "response": response.text}
            )

        return DeliveryResult(topic=topic, partition=None, offset=None)

    async def subscribe(self, topic: str, group_id: str, handler: MessageHandler) -> None:
        self.subscriptions.setdefault(topic, {})[group_id] = handler
        logger.info(
            f"Registered Dapr subscription for {topic}",
            metadata={"topic": topic, "groupId": group_id, "daprPubSubName": self.pubsub_name}
        )

    async def disconnect(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None
        self.subscriptions.clear()
        logger.info("Dapr broker closed")

    def is_healthy(self) -> bool:
        return self._client is not None

    async def get_stats(self) -> Dict[str, Any]:
        return {
            "broker": "dapr",
            "connected": self._client is not None,
            "daprPubSubName": self.pubsub_name,
            "subscriptions": {topic: list(groups) for topic, groups in self.subscriptions.items()},
        }
