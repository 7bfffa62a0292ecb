"""
FastAPI Application - User Event Service
Publishes and consumes user events in record (immutable) and POJO (mutable) styles
"""

# Load environment variables from .env file FIRST before any other imports
from dotenv import load_dotenv
load_dotenv()

from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from user_events.consumer.consumer import UserEventConsumer
from user_events.core.config import config
from user_events.core.errors import ErrorResponse, error_response_handler, http_exception_handler
from user_events.core.logger import logger
from user_events.messaging.message_broker_factory import MessageBrokerFactory
from user_events.middlewares import CorrelationIdMiddleware
from user_events.routers import dapr_router, event_router, operational_router
from user_events.services.event_codec import bean_codec, record_codec
from user_events.services.event_producer import UserEventProducer


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events"""
    # Startup
    logger.info("Starting User Event Service...")

    broker = MessageBrokerFactory.create(config)
    await broker.connect()

    record_consumer = UserEventConsumer(
        codec=record_codec,
        broker=broker,
        topic=config.record_events_topic,
        group_id=config.record_consumer_group,
    )
    pojo_consumer = UserEventConsumer(
        codec=bean_codec,
        broker=broker,
        topic=config.pojo_events_topic,
        group_id=config.pojo_consumer_group,
    )
    await record_consumer.start()
    await pojo_consumer.start()

    app.state.broker = broker
    app.state.record_producer = UserEventProducer(broker, config.record_events_topic, record_codec)
    app.state.pojo_producer = UserEventProducer(broker, config.pojo_events_topic, bean_codec)
    app.state.consumers = {
        record_consumer.topic: record_consumer,
        pojo_consumer.topic: pojo_consumer,
    }

    logger.info(
        "User Event Service started successfully",
        metadata={
            "service_name": config.service_name,
            "version": config.service_version,
            "environment": config.environment,
            "broker": config.message_broker_type,
            "port": config.port
        }
    )

    yield

    # Shutdown
    logger.info("Shutting down User Event Service...")
    await record_consumer.stop()
    await pojo_consumer.stop()
    await broker.disconnect()


app = FastAPI(
    title="User Event Service",
    description="Publishes and consumes user events as immutable records and mutable POJOs",
    version=config.service_version,
    lifespan=lifespan
)

# Add correlation ID middleware first
app.add_middleware(CorrelationIdMiddleware)

# Register centralized error handlers
app.add_exception_handler(ErrorResponse, error_response_handler)
app.add_exception_handler(HTTPException, http_exception_handler)


def jsonable_errors(exc: RequestValidationError) -> list:
    return [{"loc": list(err.get("loc", ())), "msg": err.get("msg"), "type": err.get("type")} for err in exc.errors()]


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    logger.error(
        f"Validation error: {exc.errors()}",
        metadata={"businessEvent": "VALIDATION_ERROR"}
    )
    return JSONResponse(
        status_code=422, content={"error": "Validation error", "details": jsonable_errors(exc)}
    )


# Include routers
app.include_router(operational_router, tags=["operational"])
app.include_router(event_router, prefix="/api/events", tags=["events"])
app.include_router(dapr_router, prefix="/dapr", tags=["dapr-pubsub"])
