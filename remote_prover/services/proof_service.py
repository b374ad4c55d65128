"""
ProofService abstraction over the remote proving service.

Defines the submit/get/get-batch contract the prover consumes, allowing
the HTTP service and the in-process mock to be swapped via configuration.
"""

from abc import ABC, abstractmethod
from typing import Sequence

from remote_prover.models import (
    BatchId,
    BatchStatusSummary,
    BatchSubmission,
    ProofId,
    ProofRecord,
    ProofRequest,
)


class ProofService(ABC):
    """
    Abstract base class for proof services.

    Implementations:
    - HttpProofService: Remote proof service over HTTP
    - MockProofService: Simulates the proof lifecycle in memory
    """

    @abstractmethod
    async def submit(self, request: ProofRequest) -> ProofId:
        """
        Submit a single proof request.

        Args:
            request: Circuit ID and public input to prove

        Returns:
            str: Service-assigned proof ID used as the polling key

        Raises:
            SubmissionError: If the service rejects or cannot accept the request
        """
        pass

    @abstractmethod
    async def get(self, proof_id: ProofId) -> ProofRecord:
        """
        Get the current record of a proof request.

        Args:
            proof_id: Proof ID from submit()

        Returns:
            ProofRecord: Status, plus proof and output if successful

        Raises:
            QueryError: If the query fails or the ID is unknown
        """
        pass

    @abstractmethod
    async def submit_batch(self, requests: Sequence[ProofRequest]) -> BatchSubmission:
        """
        Submit several proof requests as one grouped call.

        Args:
            requests: Proof requests, in caller order

        Returns:
            BatchSubmission: Batch ID plus one proof ID per request, same order

        Raises:
            SubmissionError: If the service rejects or cannot accept the batch
        """
        pass

    @abstractmethod
    async def get_batch(self, batch_id: BatchId) -> BatchStatusSummary:
        """
        Get the per-status item counts of a batch.

        Raises:
            QueryError: If the query fails or the ID is unknown
        """
        pass

    @property
    @abstractmethod
    def service_name(self) -> str:
        """
        Return service identifier for logs.

        Returns:
            str: "http" or "mock"
        """
        pass

    async def aclose(self) -> None:
        """Release any network resources held by the service."""
        return None
