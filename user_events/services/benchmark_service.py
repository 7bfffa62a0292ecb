"""
DTO Style Benchmarks
Compares the record (UserEvent) and bean (UserEventBean) styles on
object creation, serialization and deserialization cost.

The numbers are averages of a plain loop after a warmup; they show the order
of magnitude of the difference, not a statistically sound measurement.
"""

import time
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, List, Type

from user_events.core.logger import logger
from user_events.models import UserEvent, UserEventBean
from user_events.services.event_codec import EventModel, decode, encode

ITERATIONS = 10000
WARMUP_ITERATIONS = 1000

SAMPLE_PAYLOAD = (
    b'{"userId": "perf-test-user", "eventType": "PERFORMANCE_TEST", '
    b'"timestamp": "2024-01-01T12:00:00", '
    b'"metadata": {"iteration": "test", "type": "deserialization", "number": 12345}}'
)


@dataclass(frozen=True)
class ComparisonResult:
    operation: str
    iterations: int
    record_avg_ns: float
    bean_avg_ns: float

    @property
    def faster(self) -> str:
        return "record" if self.record_avg_ns <= self.bean_avg_ns else "bean"

    @property
    def difference_pct(self) -> float:
        fastest = min(self.record_avg_ns, self.bean_avg_ns)
        if fastest == 0:
            return 0.0
        return abs(self.record_avg_ns - self.bean_avg_ns) / fastest * 100


def _average_ns(operation: Callable[[int], object], iterations: int, warmup: int) -> float:
    for i in range(warmup):
        operation(i)

    start = time.perf_counter_ns()
    for i in range(iterations):
        operation(i)
    elapsed = time.perf_counter_ns() - start

    return elapsed / iterations if iterations else 0.0


def _compare(
    name: str,
    record_op: Callable[[int], object],
    bean_op: Callable[[int], object],
    iterations: int,
    warmup: int,
) -> ComparisonResult:
    result = ComparisonResult(
        operation=name,
        iterations=iterations,
        record_avg_ns=_average_ns(record_op, iterations, warmup),
        bean_avg_ns=_average_ns(bean_op, iterations, warmup),
    )
    logger.performance(
        f"dto_benchmark.{name}",
        duration_ms=(result.record_avg_ns + result.bean_avg_ns) * iterations / 1_000_000,
        metadata={
            "iterations": iterations,
            "recordAvgNs": round(result.record_avg_ns, 2),
            "beanAvgNs": round(result.bean_avg_ns, 2),
            "faster": result.faster,
            "differencePct": round(result.difference_pct, 2),
        }
    )
    return result


def _sample(model: Type[EventModel]) -> EventModel:
    return model.of(
        "perf-test-user",
        "PERFORMANCE_TEST",
        datetime.now(),
        {"iteration": "test", "type": "serialization"},
    )


def compare_creation(iterations: int = ITERATIONS, warmup: int = WARMUP_ITERATIONS) -> ComparisonResult:
    timestamp = datetime.now()
    metadata = {"test": "performance", "number": 42}

    return _compare(
        "creation",
        lambda i: UserEvent.of(f"user{i}", "EVENT", timestamp, metadata),
        lambda i: UserEventBean.of(f"user{i}", "EVENT", timestamp, metadata),
        iterations,
        warmup,
    )


def compare_serialization(iterations: int = ITERATIONS, warmup: int = WARMUP_ITERATIONS) -> ComparisonResult:
    record = _sample(UserEvent)
    bean = _sample(UserEventBean)

    return _compare(
        "serialization",
        lambda _: encode(record),
        lambda _: encode(bean),
        iterations,
        warmup,
    )


def compare_deserialization(iterations: int = ITERATIONS, warmup: int = WARMUP_ITERATIONS) -> ComparisonResult:
    return _compare(
        "deserialization",
        lambda _: decode(SAMPLE_PAYLOAD, UserEvent),
        lambda _: decode(SAMPLE_PAYLOAD, UserEventBean),
        iterations,
        warmup,
    )


def run_all(iterations: int = ITERATIONS, warmup: int = WARMUP_ITERATIONS) -> List[ComparisonResult]:
    return [
        compare_creation(iterations, warmup),
        compare_serialization(iterations, warmup),
        compare_deserialization(iterations, warmup),
    ]
