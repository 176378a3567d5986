"""
Enrichment pipeline orchestration.

Coordinates the flow: fetch → partition → (classify → allocate → profile →
group → score) → write back, one transaction per batch.
"""

import time
from collections import Counter

from src.core.enrichment import (
    CostAllocationSplitter,
    DepartmentClassifier,
    VoyageGrouper,
    build_vessel_profile,
    find_duplicates,
    record_voyage_id,
)
from src.core.models import (
    BatchResult,
    BatchStatus,
    EnrichedRecord,
    FlaggedRecord,
    RawRecord,
    RunSummary,
    VoyageGroup,
)
from src.core.quality import DataQualityScorer, build_payload
from src.core.reference import ReferenceResolver
from src.core.rules import EnrichmentSettings
from src.observability import metrics
from src.observability.logger import get_logger, log_operation
from src.warehouse.base import CostCenterSource, EnrichedRecordStore, RecordSource

from .partition import partition_batches

logger = get_logger(__name__)

LC_MAPPED = "LC Mapped"
LOCATION_INFERRED = "Location Inferred"


class EnrichmentPipeline:
    """
    Enriches voyage events and writes the results back in batches.

    Flow per batch:
    1. Split each record's cost-center field into allocations
    2. Classify departments (reference table first, keywords as fallback)
    3. Derive vessel attributes
    4. Group the batch into voyages
    5. Score data quality
    6. Persist the batch atomically
    """

    def __init__(
        self,
        source: RecordSource,
        store: EnrichedRecordStore,
        resolver: ReferenceResolver,
        settings: EnrichmentSettings | None = None,
    ):
        """
        Initialize the pipeline.

        Args:
            source: Supplies raw records
            store: Receives enriched batches
            resolver: Reference resolver loaded for this run
            settings: Enrichment settings (defaults when None)
        """
        self.source = source
        self.store = store
        self.resolver = resolver
        self.settings = settings or EnrichmentSettings()

        self.classifier = DepartmentClassifier(self.settings)
        self.splitter = CostAllocationSplitter(resolver, self.classifier)
        self.grouper = VoyageGrouper(resolver)
        self.scorer = DataQualityScorer(self.settings.quality)

    def enrich_record(self, record: RawRecord, voyage: VoyageGroup | None = None) -> EnrichedRecord:
        """
        Enrich one record.

        Args:
            record: The raw record
            voyage: Voyage the record belongs to, if any

        Returns:
            EnrichedRecord
        """
        allocations = self.splitter.split(record)
        primary = allocations[0]
        profile = build_vessel_profile(record)
        final_hours = record.final_hours

        quality = self.scorer.score(
            build_payload(
                record,
                final_hours=final_hours,
                vessel_daily_rate=profile.daily_rate,
                vessel_cost_total=profile.cost_total,
            )
        )

        return EnrichedRecord(
            raw=record,
            allocations=allocations,
            department=primary.department,
            standardized_location=self.resolver.standardize_location(record.location),
            final_hours=final_hours,
            unique_voyage_id=voyage.unique_voyage_id if voyage else None,
            standardized_voyage_id=voyage.standardized_voyage_id if voyage else None,
            voyage=voyage,
            quality=quality,
            mapping_status=LC_MAPPED if primary.is_reference_matched else LOCATION_INFERRED,
            data_integrity="Valid" if primary.is_reference_matched else "Inferred",
            activity_category=profile.activity_category,
            company=profile.company,
            vessel_type=profile.vessel_type,
            vessel_daily_rate=profile.daily_rate,
            vessel_cost_total=profile.cost_total,
        )

    def enrich_batch(self, records: list[RawRecord]) -> list[EnrichedRecord]:
        """
        Enrich a batch in memory.

        The batch must hold every event of each voyage it touches. The same
        input always yields the same output.

        Args:
            records: Raw records of the batch

        Returns:
            EnrichedRecords in input order
        """
        voyages = self.grouper.group(records)
        return [self.enrich_record(r, voyages.get(record_voyage_id(r))) for r in records]

    def run(self, force: bool = False) -> RunSummary:
        """
        Enrich every unprocessed record (every record when forced).

        A batch that fails to enrich or persist is reported as rolled back
        and the run moves on to the next batch.

        Args:
            force: Reprocess records that were already enriched

        Returns:
            RunSummary
        """
        started = time.perf_counter()

        with log_operation("Enrichment run", logger=logger, force=force):
            records = self.source.fetch_records(force=force)

            duplicates = find_duplicates(records)
            if duplicates:
                logger.warning(
                    "Duplicate voyage events detected",
                    extra={"duplicate_count": len(duplicates), "record_ids": duplicates[:20]},
                )
                metrics.increment_counter(metrics.duplicates_detected_total, len(duplicates))

            batches = partition_batches(records, self.settings.batch_size)
            logger.info(
                "Partitioned records",
                extra={"record_count": len(records), "batch_count": len(batches)},
            )

            batch_results: list[BatchResult] = []
            department_counts: Counter = Counter()
            flagged: list[FlaggedRecord] = []
            voyages: dict[str, VoyageGroup] = {}

            for batch_number, batch in enumerate(batches, start=1):
                result, enriched = self._process_batch(batch_number, batch)
                batch_results.append(result)
                if not result.committed:
                    continue

                for record in enriched:
                    department_counts[record.department] += 1
                    needs_review = self.scorer.needs_review(record.quality)
                    if needs_review:
                        flagged.append(
                            FlaggedRecord(
                                record_id=record.record_id,
                                score=record.quality.score,
                                issues=record.quality.issues,
                            )
                        )
                    if record.voyage is not None:
                        voyages[record.voyage.unique_voyage_id] = record.voyage
                    metrics.record_enriched(record.department, record.quality.score, needs_review)
                    for allocation in record.allocations:
                        metrics.increment_counter(
                            metrics.allocations_total,
                            1,
                            matched=str(allocation.is_reference_matched).lower(),
                        )

            duration = time.perf_counter() - started
            metrics.observe_histogram(metrics.run_duration_seconds, duration)

            summary = RunSummary(
                total_scanned=len(records),
                total_updated=sum(r.updated_count for r in batch_results),
                department_counts=dict(department_counts),
                needs_review_count=len(flagged),
                flagged_records=flagged,
                batch_results=batch_results,
                duplicates_detected=len(duplicates),
                voyage_count=len(voyages),
                pattern_counts=dict(Counter(v.pattern.value for v in voyages.values())),
                purpose_counts=dict(Counter(v.purpose.value for v in voyages.values())),
                duration_seconds=round(duration, 3),
            )

            logger.info(
                "Enrichment run summary",
                extra={
                    "total_scanned": summary.total_scanned,
                    "total_updated": summary.total_updated,
                    "batches_committed": summary.batches_committed,
                    "batches_failed": summary.batches_failed,
                    "needs_review_count": summary.needs_review_count,
                    "voyage_count": summary.voyage_count,
                },
            )

        return summary

    def _process_batch(
        self, batch_number: int, batch: list[RawRecord]
    ) -> tuple[BatchResult, list[EnrichedRecord]]:
        """Enrich and persist one batch, converting failures into a rollback result."""
        with log_operation(
            "Enrich batch", logger=logger, batch_number=batch_number, record_count=len(batch)
        ):
            try:
                enriched = self.enrich_batch(batch)
            except ValueError as e:
                logger.error(
                    "Batch enrichment failed",
                    extra={"batch_number": batch_number, "error_message": str(e)},
                )
                result = BatchResult(
                    batch_number=batch_number,
                    status=BatchStatus.ROLLED_BACK,
                    record_count=len(batch),
                    error=str(e),
                )
                metrics.record_batch(len(batch), committed=False)
                return result, []

            result = self.store.update_many(enriched, batch_number)

        metrics.record_batch(len(batch), committed=result.committed)
        if result.committed:
            logger.info(
                "Batch committed",
                extra={"batch_number": batch_number, "updated_count": result.updated_count},
            )
        return result, enriched


def run_enrichment(
    cost_centers: CostCenterSource,
    source: RecordSource,
    store: EnrichedRecordStore,
    settings: EnrichmentSettings | None = None,
    force: bool = False,
) -> RunSummary:
    """
    Load the reference table and run the pipeline.

    Nothing is processed when the reference table cannot be loaded.

    Args:
        cost_centers: Reference-table source
        source: Supplies raw records
        store: Receives enriched batches
        settings: Enrichment settings (defaults when None)
        force: Reprocess records that were already enriched

    Returns:
        RunSummary

    Raises:
        ReferenceTableUnavailable: If the reference table cannot be loaded
    """
    settings = settings or EnrichmentSettings()

    with log_operation("Load reference table", logger=logger):
        entries = cost_centers.load_entries()
    resolver = ReferenceResolver.from_entries(entries, settings)
    logger.info("Reference table loaded", extra={"entry_count": len(resolver)})

    pipeline = EnrichmentPipeline(source, store, resolver, settings)
    return pipeline.run(force=force)
