"""Proof submission: request construction, jitter and hand-off to the service."""

import asyncio
import logging
import random
from typing import Optional, Sequence

from .exceptions import SubmissionError
from .models import BatchSubmission, ProofId, ProofRequest
from .services.proof_service import ProofService

logger = logging.getLogger(__name__)

# Upper bound (exclusive) of the random delay before a single submission.
# Spreads simultaneous submissions from independent clients.
SUBMIT_JITTER_MAX_MS = 5000


def submission_jitter(rng: Optional[random.Random] = None) -> float:
    """Random pre-submission delay in seconds, uniform over [0, 5) at ms resolution."""
    rng = rng or random
    return rng.randrange(SUBMIT_JITTER_MAX_MS) / 1000


async def submit_proof(
    service: ProofService,
    circuit_id: str,
    public_input: bytes,
    rng: Optional[random.Random] = None,
) -> ProofId:
    """
    Submit a single proof request after a random jitter delay.

    Raises:
        SubmissionError: If the service rejects or cannot accept the request
    """
    request = ProofRequest(circuit_id=circuit_id, public_input=public_input)

    delay = submission_jitter(rng)
    logger.debug(f"Delaying submission by {delay:.3f}s: circuit_id={circuit_id}")
    await asyncio.sleep(delay)

    proof_id = await service.submit(request)
    logger.info(f"Proof submitted: proof_id={proof_id}, circuit_id={circuit_id}")
    return proof_id


async def submit_proof_batch(
    service: ProofService,
    circuit_id: str,
    inputs: Sequence[bytes],
) -> BatchSubmission:
    """
    Submit one request per input as a single grouped call. No jitter is applied.

    The returned proof IDs correlate positionally with inputs.

    Raises:
        SubmissionError: If the batch is empty, rejected, or the service
            returns a different number of proof IDs than inputs
    """
    if not inputs:
        raise SubmissionError("Cannot submit an empty batch")

    requests = [
        ProofRequest(circuit_id=circuit_id, public_input=public_input)
        for public_input in inputs
    ]
    submission = await service.submit_batch(requests)

    if len(submission.proof_ids) != len(requests):
        raise SubmissionError(
            f"Batch {submission.batch_id} returned {len(submission.proof_ids)} "
            f"proof IDs for {len(requests)} requests",
            details={
                "batch_id": submission.batch_id,
                "nb_requests": len(requests),
                "nb_proof_ids": len(submission.proof_ids),
            },
        )

    logger.info(
        f"Proof batch submitted: batch_id={submission.batch_id}, "
        f"circuit_id={circuit_id}, nb_requests={len(requests)}"
    )
    return submission
