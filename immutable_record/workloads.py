"""
Benchmark workloads for immutable-record.

Each workload instantiates (or updates) one kind of value `count` times so the
orchestrator can compare record construction paths against plain Python
containers:

- dict / pmap / namedtuple: baselines
- record: flat schema, plain strategy
- record_defaults: defaulting strategy
- record_types: typed strategy (shape validated on every construction)
- record_update: typed update path (copy-on-write + whole-shape re-validation)

All workloads share the same sample pairs ``{"meowmix": 123, "woof": "woof"}``.
"""

from __future__ import annotations

import abc
import time
from collections import namedtuple
from typing import Any, Callable, Dict, Optional, Protocol, TypedDict, runtime_checkable

from immutable_record.generator import declare, define
from immutable_record.infrastructure import persistent_map

EXAMPLE: Dict[str, Any] = {"meowmix": 123, "woof": "woof"}
DEFAULT_EXAMPLE: Dict[str, Any] = {"meowmix": 123}


class WorkloadResult(TypedDict, total=False):
    """
    Minimal metrics contract returned by workloads.

    Fields are optional to keep implementations lightweight; orchestrator/reporters
    should tolerate missing values and enrich when possible.
    """

    operations: int
    duration_seconds: float
    throughput_ops_per_sec: float
    peak_rss_bytes: Optional[int]
    peak_traced_bytes: Optional[int]
    cpu_percent: Optional[float]
    error: Optional[str]
    notes: Optional[str]


@runtime_checkable
class BenchmarkWorkload(Protocol):
    """
    Common interface all benchmark workloads must implement.

    Attributes
    ----------
    name : str
        A short machine-friendly identifier.
    description : str
        A human-friendly summary of what is measured.
    """

    name: str
    description: str

    def execute(self, count: int) -> WorkloadResult:
        """
        Run the workload ``count`` times and return metrics.
        """
        ...


class AbstractBenchmarkWorkload(abc.ABC):
    """
    Times a zero-argument operation produced by `prepare` over ``count`` calls.

    Subclasses set `name` and `description` and implement `prepare`; setup
    work done in `prepare` is excluded from the measurement.
    """

    name: str
    description: str
    notes: Optional[str] = None

    def __init__(self, type_checking: bool = True) -> None:
        self.type_checking = type_checking

    @abc.abstractmethod
    def prepare(self) -> Callable[[], Any]:  # pragma: no cover - interface only
        """Return the operation to time."""
        raise NotImplementedError

    def execute(self, count: int) -> WorkloadResult:
        operation = self.prepare()
        start = time.perf_counter()
        for _ in range(count):
            operation()
        duration_seconds = time.perf_counter() - start
        throughput = count / duration_seconds if duration_seconds > 0 else 0.0
        return WorkloadResult(
            operations=count,
            duration_seconds=duration_seconds,
            throughput_ops_per_sec=throughput,
            notes=self.notes,
        )


class DictWorkload(AbstractBenchmarkWorkload):
    name = "dict"
    description = "Plain dict copy of the sample pairs (baseline)."

    def prepare(self) -> Callable[[], Any]:
        return lambda: dict(EXAMPLE)


class PMapWorkload(AbstractBenchmarkWorkload):
    name = "pmap"
    description = "Persistent map built from the sample pairs (backing store baseline)."

    def prepare(self) -> Callable[[], Any]:
        return lambda: persistent_map.from_pairs(EXAMPLE)


class NamedTupleWorkload(AbstractBenchmarkWorkload):
    name = "namedtuple"
    description = "collections.namedtuple built from keywords (baseline)."

    def prepare(self) -> Callable[[], Any]:
        catnip = namedtuple("Catnip", ["meowmix", "woof"])
        return lambda: catnip(**EXAMPLE)


class RecordWorkload(AbstractBenchmarkWorkload):
    name = "record"
    description = "Flat record type (plain strategy)."

    def prepare(self) -> Callable[[], Any]:
        record_type = define("meowmix", "woof", name="HRecord", type_checking=self.type_checking)
        return lambda: record_type.new(EXAMPLE)


class DefaultsWorkload(AbstractBenchmarkWorkload):
    name = "record_defaults"
    description = "Record type with a default (defaulting strategy)."

    def prepare(self) -> Callable[[], Any]:
        @declare(type_checking=self.type_checking)
        def HRecordDefault(f):
            f.field("woof", default="wood")
            f.field("meowmix")

        return lambda: HRecordDefault.new(DEFAULT_EXAMPLE)


def _typed_record(type_checking: bool):
    @declare(type_checking=type_checking)
    def HRecordTypes(f):
        f.field("woof", str)
        f.field("meowmix", int)

    return HRecordTypes


class TypedWorkload(AbstractBenchmarkWorkload):
    name = "record_types"
    description = "Record type with field types (typed strategy)."

    def prepare(self) -> Callable[[], Any]:
        record_type = _typed_record(self.type_checking)
        if not self.type_checking:
            self.notes = "Type checking disabled: shape predicate never runs."
        return lambda: record_type.new(EXAMPLE)


class UpdateWorkload(AbstractBenchmarkWorkload):
    name = "record_update"
    description = "Single-field update of a typed record (re-validates whole shape)."

    def prepare(self) -> Callable[[], Any]:
        record = _typed_record(self.type_checking).new(EXAMPLE)
        return lambda: record.update(meowmix=456)


__all__ = [
    "EXAMPLE",
    "DEFAULT_EXAMPLE",
    "WorkloadResult",
    "BenchmarkWorkload",
    "AbstractBenchmarkWorkload",
    "DictWorkload",
    "PMapWorkload",
    "NamedTupleWorkload",
    "RecordWorkload",
    "DefaultsWorkload",
    "TypedWorkload",
    "UpdateWorkload",
]
