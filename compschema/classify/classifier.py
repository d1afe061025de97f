"""
Classifier - one schema entry per registry entry.

Rules are tried in a fixed order, first match wins:

     1. unit                       -> empty
     2. bare int                   -> embed, framing probed
     3. bare float / boolean       -> embed
     4. identifier / tag key       -> embed string
     5. chat text                  -> custom
     6. either-holder              -> eitherholder
     7. holder                     -> embed id (or sound-event)
     8. enum                       -> embed ordinal, recorded in the Enum Catalog
     9. record                     -> see RecordShape
    10. top-level list             -> custom
    11. anything else              -> custom

Classification never mutates the registry. Per-run state (Enum Catalog,
summary counters) lives on the Classifier, so use one instance per run.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass

from compschema.classify.catalog import EnumCatalog, RunSummary
from compschema.classify.probe import PROBE_HIGH, PROBE_LOW, ProbeResult, probe_integer_framing
from compschema.classify.records import RecordShape, inspect_record
from compschema.classify.resolver import resolve
from compschema.protocol.descriptors import Kind
from compschema.protocol.wire import WireType
from compschema.registry.entry import Registry, RegistryEntry
from compschema.schema.entry import SchemaEntry

log = logging.getLogger(__name__)


@dataclass
class ClassifierConfig:
    """Classification run configuration."""
    # >1 classifies entries on a thread pool; output order is unaffected
    workers: int = 1
    # Sample integers for the framing probe
    probe_low: int = PROBE_LOW
    probe_high: int = PROBE_HIGH


@dataclass
class ClassificationRun:
    """Everything one run produces."""
    entries: list[SchemaEntry]      # sorted by name
    catalog: EnumCatalog
    summary: RunSummary


class Classifier:
    def __init__(self, config: ClassifierConfig | None = None):
        self.config = config or ClassifierConfig()
        self.catalog = EnumCatalog()
        self.summary = RunSummary()

    def classify(self, entry: RegistryEntry) -> SchemaEntry:
        result = self._classify(entry)
        self.summary.count(entry.name, result.pattern)
        log.debug("%s -> %s", entry.name, result.to_dict())
        return result

    def classify_registry(self, registry: Registry) -> ClassificationRun:
        workers = self.config.workers
        if workers > 1:
            with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="classify") as pool:
                results = list(pool.map(self.classify, registry))
        else:
            results = [self.classify(entry) for entry in registry]

        results.sort(key=lambda e: e.name)
        self.summary.finalize()
        return ClassificationRun(results, self.catalog, self.summary)

    # ---- Rules ----

    def _classify(self, entry: RegistryEntry) -> SchemaEntry:
        name = entry.name
        vt = entry.value_type

        if vt is None:
            log.warning("%s: value type unavailable (%s), classifying as custom", name, entry.error)
            self.summary.mark_unavailable(name)
            return SchemaEntry.custom(name)

        match vt.kind:
            case Kind.UNIT:
                return SchemaEntry.empty(name)
            case Kind.INT:
                probe = self._probe(entry)
                return SchemaEntry.embed(name, probe.label, unverified=not probe.verified)
            case Kind.FLOAT:
                return SchemaEntry.embed(name, WireType.FLOAT32)
            case Kind.BOOLEAN:
                return SchemaEntry.embed(name, WireType.BOOLEAN)
            case Kind.IDENTIFIER | Kind.TAG:
                return SchemaEntry.embed(name, WireType.STRING)
            case Kind.CHAT:
                return SchemaEntry.custom(name)
            case Kind.EITHER_HOLDER:
                return SchemaEntry.either_holder(name)
            case Kind.HOLDER | Kind.ENUM:
                return SchemaEntry.embed(name, resolve(vt, self.catalog))
            case Kind.RECORD:
                return self._classify_record(entry)
            case _:
                # top-level lists are never flattened; only record-wrapped ones become arrays
                return SchemaEntry.custom(name)

    def _classify_record(self, entry: RegistryEntry) -> SchemaEntry:
        name = entry.name
        layout = inspect_record(entry.value_type, self.catalog)

        match layout.shape:
            case RecordShape.EMPTY:
                return SchemaEntry.empty(name)
            case RecordShape.ARRAY:
                return SchemaEntry.array(name, layout.field_name, layout.label)
            case RecordShape.PROBE_INT:
                probe = self._probe(entry)
                return SchemaEntry.embed(name, probe.label, unverified=not probe.verified)
            case RecordShape.EMBED:
                return SchemaEntry.embed(name, layout.label)
            case RecordShape.TUPLE:
                return SchemaEntry.tuple_of(name, list(layout.fields))
            case _:
                log.debug("%s: custom record, %s", name, layout.reason)
                return SchemaEntry.custom(name)

    def _probe(self, entry: RegistryEntry) -> ProbeResult:
        result = probe_integer_framing(
            entry.encode, entry.sample,
            low=self.config.probe_low, high=self.config.probe_high,
        )
        self.summary.count_probe(entry.name, result.compact, result.verified)
        if not result.verified:
            log.warning(
                "%s: framing probe failed (%s), defaulting to %s (unverified)",
                entry.name, result.error, result.label,
            )
        return result


def classify_registry(registry: Registry, config: ClassifierConfig | None = None) -> ClassificationRun:
    """Classify every entry of a registry with a fresh Classifier."""
    return Classifier(config).classify_registry(registry)
