"""
Poll loops for single proofs and proof batches.

Each loop sleeps for the poll interval, queries the service, and decides
whether to stop. The deadline is a poll budget, floor(timeout / interval),
not a wall-clock check.

Query errors follow one policy in both loops: transient errors are logged
and cost only the current tick, non-transient errors end the call.
"""

import asyncio
import logging
from dataclasses import dataclass

from .aggregator import BatchOutcome, aggregate_batch_status
from .exceptions import (
    BatchProofFailedError,
    BatchTimeoutError,
    ProofFailedError,
    ProofTimeoutError,
    QueryError,
)
from .models import (
    BatchSubmission,
    LocalOutput,
    ProofId,
    ProofRequestStatus,
    RemoteOutput,
)
from .services.proof_service import ProofService

logger = logging.getLogger(__name__)

POLL_INTERVAL_SECS = 10


@dataclass(frozen=True)
class PollSchedule:
    timeout_secs: int
    interval_secs: float = POLL_INTERVAL_SECS

    @property
    def max_polls(self) -> int:
        """Maximum number of status queries before timing out."""
        return int(self.timeout_secs // self.interval_secs)


def _handle_query_error(key: str, error: QueryError, poll: int, max_polls: int) -> None:
    if not error.transient:
        logger.error(f"proof {key}: query failed, giving up: {error.message}")
        raise error
    logger.warning(
        f"proof {key}: query failed, nb_polls={poll}/{max_polls}: {error.message}"
    )


async def poll_proof(
    service: ProofService,
    proof_id: ProofId,
    schedule: PollSchedule,
) -> LocalOutput:
    """
    Poll a single proof until it succeeds, fails, or the budget runs out.

    Returns:
        LocalOutput with the proof and output from the service record

    Raises:
        ProofFailedError: On any terminal status other than success
        ProofTimeoutError: If max_polls queries pass without a terminal status
        QueryError: On a non-transient query error
    """
    max_polls = schedule.max_polls
    last_status = ProofRequestStatus.PENDING.value

    try:
        for i in range(max_polls):
            await asyncio.sleep(schedule.interval_secs)
            try:
                record = await service.get(proof_id)
            except QueryError as e:
                _handle_query_error(proof_id, e, i + 1, max_polls)
                continue

            status = record.status
            last_status = record.reported_status
            logger.debug(
                f"proof {proof_id}: status={last_status}, nb_polls={i + 1}/{max_polls}"
            )

            if status is ProofRequestStatus.SUCCESS:
                logger.info(f"proof {proof_id}: completed after {i + 1} polls")
                return LocalOutput(
                    proof=record.result.proof, output=record.result.output
                )
            if status.is_terminal:
                logger.error(f"proof {proof_id}: terminal status={last_status}")
                raise ProofFailedError(proof_id, last_status)

    except asyncio.CancelledError:
        logger.warning(f"proof {proof_id}: polling cancelled")
        raise

    logger.error(
        f"proof {proof_id}: timed out after {max_polls} polls, status={last_status}"
    )
    raise ProofTimeoutError(proof_id, last_status, max_polls)


async def poll_batch(
    service: ProofService,
    submission: BatchSubmission,
    schedule: PollSchedule,
) -> RemoteOutput:
    """
    Poll a batch until every item succeeds, any item fails, or the budget runs out.

    Results stay on the service; the returned handle lists the proof IDs in
    submission order.

    Raises:
        BatchProofFailedError: If any item reached a terminal failure
        BatchTimeoutError: If max_polls queries pass without a verdict
        BatchInvariantError: If the service reports an impossible summary
        QueryError: On a non-transient query error
    """
    batch_id = submission.batch_id
    batch_size = len(submission.proof_ids)
    max_polls = schedule.max_polls

    try:
        for i in range(max_polls):
            await asyncio.sleep(schedule.interval_secs)
            try:
                summary = await service.get_batch(batch_id)
            except QueryError as e:
                _handle_query_error(f"batch {batch_id}", e, i + 1, max_polls)
                continue

            for status, count in summary.statuses.items():
                logger.debug(
                    f"proof batch {batch_id}: status={status.value}, count={count}"
                )
            logger.debug(f"proof batch {batch_id}: nb_polls={i + 1}/{max_polls}")

            verdict = aggregate_batch_status(summary, batch_size, batch_id)
            if verdict.outcome is BatchOutcome.FAILED:
                logger.error(
                    f"proof batch {batch_id}: nb_failed={verdict.failed_count}, "
                    f"nb_success={verdict.succeeded_count}"
                )
                raise BatchProofFailedError(
                    batch_id, verdict.failed_count, verdict.succeeded_count
                )
            if verdict.outcome is BatchOutcome.ALL_SUCCEEDED:
                logger.info(f"proof batch {batch_id}: completed after {i + 1} polls")
                return RemoteOutput(proof_ids=list(submission.proof_ids))

    except asyncio.CancelledError:
        logger.warning(f"proof batch {batch_id}: polling cancelled")
        raise

    logger.error(f"proof batch {batch_id}: timed out after {max_polls} polls")
    raise BatchTimeoutError(batch_id, max_polls)
