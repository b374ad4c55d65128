"""
Pytest configuration and fixtures
"""

import random
from typing import Sequence
from unittest.mock import AsyncMock, patch

import pytest

from remote_prover.config import ProverConfig
from remote_prover.models import (
    BatchStatusSummary,
    BatchSubmission,
    ProofRecord,
    ProofRequest,
    ProofRequestStatus,
    ProofResult,
)
from remote_prover.services.proof_service import ProofService


class ScriptedProofService(ProofService):
    """
    Proof service that replays scripted responses.

    Each get()/get_batch() call consumes the next scripted item; the last one
    repeats forever. Exception items are raised instead of returned.
    """

    def __init__(
        self,
        records: Sequence = (),
        summaries: Sequence = (),
        proof_id: str = "proof_1",
        submission: BatchSubmission | None = None,
    ):
        self.records = list(records)
        self.summaries = list(summaries)
        self.proof_id = proof_id
        self.submission = submission
        self.submitted: list[ProofRequest] = []
        self.submitted_batches: list[list[ProofRequest]] = []
        self.get_calls = 0
        self.get_batch_calls = 0
        self.closed = False

    @property
    def service_name(self) -> str:
        return "scripted"

    @staticmethod
    def _next(items: list):
        item = items.pop(0) if len(items) > 1 else items[0]
        if isinstance(item, Exception):
            raise item
        return item

    async def submit(self, request):
        self.submitted.append(request)
        return self.proof_id

    async def get(self, proof_id):
        self.get_calls += 1
        return self._next(self.records)

    async def submit_batch(self, requests):
        self.submitted_batches.append(list(requests))
        if self.submission is not None:
            return self.submission
        return BatchSubmission(
            batch_id="batch_1",
            proof_ids=[f"proof_{i + 1}" for i in range(len(requests))],
        )

    async def get_batch(self, batch_id):
        self.get_batch_calls += 1
        return self._next(self.summaries)

    async def aclose(self):
        self.closed = True


class ZeroJitter(random.Random):
    """Random source whose submission jitter is always zero."""

    def randrange(self, *args, **kwargs):
        return 0


@pytest.fixture
def scripted_service():
    """Factory for ScriptedProofService instances"""
    return ScriptedProofService


@pytest.fixture
def zero_jitter():
    return ZeroJitter()


@pytest.fixture
def no_sleep():
    """Make asyncio.sleep return immediately; yields the mock to inspect delays"""
    with patch("remote_prover.poller.asyncio.sleep", new_callable=AsyncMock) as mock_sleep:
        yield mock_sleep


@pytest.fixture
def config():
    """Prover configuration pointing at a placeholder service URL"""
    return ProverConfig(
        _env_file=None,
        PROOF_SERVICE_URL="https://prover.example.com",
        PROOF_TIMEOUT_SECS=100,
        PROOF_BATCH_TIMEOUT_SECS=100,
    )


@pytest.fixture
def make_record():
    """Factory for ProofRecord instances with consistent result fields"""

    def _make(status: ProofRequestStatus, proof_id: str = "proof_1") -> ProofRecord:
        result = None
        if status is ProofRequestStatus.SUCCESS:
            result = ProofResult(proof=b"\x01\x02proof", output=b"\x03output")
        return ProofRecord(id=proof_id, status=status, result=result)

    return _make


@pytest.fixture
def make_summary():
    """Factory for BatchStatusSummary from status=count keyword arguments"""

    def _make(**counts: int) -> BatchStatusSummary:
        return BatchStatusSummary(
            statuses={ProofRequestStatus(name): n for name, n in counts.items()}
        )

    return _make
