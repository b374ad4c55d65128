"""
MockProofService - Simulates the proof service lifecycle in memory.

Used for development and tests without access to a real proving service.
No proof is computed: results are deterministic digests of the request.
"""

import asyncio
import hashlib
import logging
import random
import uuid
from datetime import datetime, timezone
from typing import Dict, List, Optional, Sequence

from remote_prover.exceptions import QueryError, SubmissionError
from remote_prover.models import (
    BatchId,
    BatchStatusSummary,
    BatchSubmission,
    ProofId,
    ProofRecord,
    ProofRequest,
    ProofRequestStatus,
    ProofResult,
)
from .proof_service import ProofService

logger = logging.getLogger(__name__)


def fake_proof_result(request: ProofRequest) -> ProofResult:
    """Deterministic stand-in for a proof and output of the given request."""
    seed = request.circuit_id.encode("utf-8") + b":" + request.public_input
    return ProofResult(
        proof=hashlib.sha256(b"proof:" + seed).digest(),
        output=hashlib.sha256(b"output:" + seed).digest(),
    )


class MockProofService(ProofService):
    """
    Mock proof service that simulates the proving lifecycle.

    Lifecycle per request: pending (queue delay) → running (run delay)
    → success | failure. Failures are drawn with probability failure_rate.
    All mock log lines are prefixed with [MOCK-PROVER].
    """

    def __init__(
        self,
        queue_delay: tuple[float, float] = (2.0, 5.0),
        run_delay: tuple[float, float] = (5.0, 15.0),
        failure_rate: float = 0.0,
        rng: Optional[random.Random] = None,
    ):
        self._queue_delay = queue_delay
        self._run_delay = run_delay
        self._failure_rate = failure_rate
        self._rng = rng or random.Random()
        self._jobs: Dict[ProofId, Dict] = {}
        self._batches: Dict[BatchId, List[ProofId]] = {}
        self._tasks: set[asyncio.Task] = set()
        logger.info("[MOCK-PROVER] MockProofService initialized")

    @property
    def service_name(self) -> str:
        return "mock"

    def _create_job(self, request: ProofRequest) -> ProofId:
        proof_id = f"proof_{uuid.uuid4()}"
        self._jobs[proof_id] = {
            "request": request,
            "status": ProofRequestStatus.PENDING,
            "result": None,
            "queued_at": datetime.now(timezone.utc).isoformat(),
            "started_at": None,
            "completed_at": None,
        }
        task = asyncio.create_task(self._simulate_lifecycle(proof_id))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return proof_id

    async def _simulate_lifecycle(self, proof_id: ProofId) -> None:
        job = self._jobs[proof_id]
        await asyncio.sleep(self._rng.uniform(*self._queue_delay))

        job["status"] = ProofRequestStatus.RUNNING
        job["started_at"] = datetime.now(timezone.utc).isoformat()
        logger.debug(f"[MOCK-PROVER] Proof running: {proof_id}")

        await asyncio.sleep(self._rng.uniform(*self._run_delay))

        job["completed_at"] = datetime.now(timezone.utc).isoformat()
        if self._rng.random() < self._failure_rate:
            job["status"] = ProofRequestStatus.FAILURE
            logger.info(f"[MOCK-PROVER] Proof failed: {proof_id}")
            return

        job["result"] = fake_proof_result(job["request"])
        job["status"] = ProofRequestStatus.SUCCESS
        logger.info(f"[MOCK-PROVER] Proof complete: {proof_id}")

    async def submit(self, request: ProofRequest) -> ProofId:
        proof_id = self._create_job(request)
        logger.info(
            f"[MOCK-PROVER] Proof submitted: {proof_id}, "
            f"circuit_id={request.circuit_id}"
        )
        return proof_id

    async def get(self, proof_id: ProofId) -> ProofRecord:
        job = self._jobs.get(proof_id)
        if job is None:
            raise QueryError(f"Proof not found: {proof_id}", transient=False)
        return ProofRecord(id=proof_id, status=job["status"], result=job["result"])

    async def submit_batch(self, requests: Sequence[ProofRequest]) -> BatchSubmission:
        if not requests:
            raise SubmissionError("Cannot submit an empty batch")
        proof_ids = [self._create_job(request) for request in requests]
        batch_id = f"batch_{uuid.uuid4()}"
        self._batches[batch_id] = proof_ids
        logger.info(
            f"[MOCK-PROVER] Batch submitted: {batch_id}, nb_requests={len(proof_ids)}"
        )
        return BatchSubmission(batch_id=batch_id, proof_ids=proof_ids)

    async def get_batch(self, batch_id: BatchId) -> BatchStatusSummary:
        proof_ids = self._batches.get(batch_id)
        if proof_ids is None:
            raise QueryError(f"Batch not found: {batch_id}", transient=False)
        statuses: Dict[ProofRequestStatus, int] = {}
        for proof_id in proof_ids:
            status = self._jobs[proof_id]["status"]
            statuses[status] = statuses.get(status, 0) + 1
        return BatchStatusSummary(statuses=statuses)

    async def aclose(self) -> None:
        for task in list(self._tasks):
            task.cancel()
        if self._tasks:
            await asyncio.gather(*self._tasks, return_exceptions=True)
