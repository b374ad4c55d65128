"""
RemoteProver - generates proofs on a remote proving service.

Composes submission and polling into the two public operations,
prove() for a single input and batch_prove() for many.
"""

import logging
import random
from typing import Optional, Sequence

from .config import ProverConfig
from .exceptions import ProofFailedError
from .models import LocalOutput, ProofId, ProofRequestStatus, ProverOutput
from .poller import POLL_INTERVAL_SECS, PollSchedule, poll_batch, poll_proof
from .services import ProofService, create_proof_service
from .submission import submit_proof, submit_proof_batch

logger = logging.getLogger(__name__)


class RemoteProver:
    """
    A prover that generates proofs remotely on another machine.

    The proof service (and its address-pinned HTTP client) is created once
    at construction and shared by all calls. Concurrent prove()/batch_prove()
    calls hold no other shared state.
    """

    def __init__(
        self,
        config: ProverConfig,
        service: Optional[ProofService] = None,
        rng: Optional[random.Random] = None,
        poll_interval_secs: float = POLL_INTERVAL_SECS,
    ):
        """
        Args:
            config: Prover settings
            service: Proof service to use instead of the one built from config
            rng: Random source for submission jitter
            poll_interval_secs: Seconds between status queries

        Raises:
            ConfigurationError: If the service URL is malformed or unresolvable
        """
        self.config = config
        self.service = service or create_proof_service(config)
        self._rng = rng
        self._poll_interval_secs = poll_interval_secs
        logger.info(f"RemoteProver initialized (service={self.service.service_name})")

    async def prove(self, circuit_id: str, public_input: bytes) -> ProverOutput:
        """
        Prove a single input and return the proof and output inline.

        Returns:
            LocalOutput

        Raises:
            SubmissionError, ProofFailedError, ProofTimeoutError, QueryError
        """
        logger.debug(f"prove: circuit_id={circuit_id}")
        proof_id = await submit_proof(self.service, circuit_id, public_input, self._rng)
        schedule = PollSchedule(
            timeout_secs=self.config.PROOF_TIMEOUT_SECS,
            interval_secs=self._poll_interval_secs,
        )
        return await poll_proof(self.service, proof_id, schedule)

    async def batch_prove(
        self, circuit_id: str, inputs: Sequence[bytes]
    ) -> ProverOutput:
        """
        Prove a batch of inputs, leaving the results on the service.

        Returns:
            RemoteOutput whose proof_ids correlate positionally with inputs

        Raises:
            SubmissionError, BatchProofFailedError, BatchTimeoutError,
            BatchInvariantError, QueryError
        """
        logger.debug(f"batch_prove: circuit_id={circuit_id}, nb_inputs={len(inputs)}")
        submission = await submit_proof_batch(self.service, circuit_id, inputs)
        schedule = PollSchedule(
            timeout_secs=self.config.PROOF_BATCH_TIMEOUT_SECS,
            interval_secs=self._poll_interval_secs,
        )
        return await poll_batch(self.service, submission, schedule)

    async def get_proof(self, proof_id: ProofId) -> LocalOutput:
        """
        Fetch the proof and output of a request that already succeeded.

        Use this to materialize items of a RemoteOutput. Does not poll.

        Raises:
            ProofFailedError: If the request has not succeeded
            QueryError: If the query fails
        """
        record = await self.service.get(proof_id)
        if record.status is not ProofRequestStatus.SUCCESS:
            raise ProofFailedError(proof_id, record.reported_status)
        return LocalOutput(proof=record.result.proof, output=record.result.output)

    async def aclose(self) -> None:
        await self.service.aclose()

    async def __aenter__(self) -> "RemoteProver":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()
