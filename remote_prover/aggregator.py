"""Reduction of a batch status summary to a single verdict."""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .exceptions import BatchInvariantError
from .models import BatchStatusSummary, ProofRequestStatus

logger = logging.getLogger(__name__)


class BatchOutcome(str, Enum):
    FAILED = "failed"
    ALL_SUCCEEDED = "all_succeeded"
    IN_PROGRESS = "in_progress"


@dataclass(frozen=True)
class BatchVerdict:
    outcome: BatchOutcome
    failed_count: int = 0
    succeeded_count: int = 0


def aggregate_batch_status(
    summary: BatchStatusSummary,
    batch_size: int,
    batch_id: Optional[str] = None,
) -> BatchVerdict:
    """
    Reduce per-status counts to a batch verdict.

    Any terminal failure dominates, even while other items are still pending.
    A batch has succeeded only when success is the sole status present.

    Args:
        summary: Latest per-status counts from the service
        batch_size: Number of requests submitted in the batch
        batch_id: Used in log lines and errors only

    Raises:
        BatchInvariantError: If the counts exceed batch_size, or success is
            the only status but its count falls short of batch_size
    """
    succeeded = summary.count(ProofRequestStatus.SUCCESS)
    failed = sum(
        count for status, count in summary.statuses.items() if status.is_failure
    )

    if failed > 0:
        return BatchVerdict(BatchOutcome.FAILED, failed, succeeded)

    only_success = summary.present() == {ProofRequestStatus.SUCCESS}
    if summary.total > batch_size or (only_success and succeeded != batch_size):
        statuses = {status.value: count for status, count in summary.statuses.items()}
        logger.error(
            f"Batch {batch_id} summary does not match batch size: "
            f"statuses={statuses}, batch_size={batch_size}"
        )
        raise BatchInvariantError(batch_id, statuses, batch_size)

    if only_success:
        return BatchVerdict(BatchOutcome.ALL_SUCCEEDED, 0, succeeded)

    if summary.total != batch_size:
        # Items may not be reported yet right after the batch is accepted
        logger.warning(
            f"Batch {batch_id} reports {summary.total} of {batch_size} items"
        )

    return BatchVerdict(BatchOutcome.IN_PROGRESS, 0, succeeded)
