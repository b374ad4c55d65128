"""Exception hierarchy for the remote prover client."""

from typing import Any


class RemoteProverError(Exception):
    """Base exception for remote prover errors."""

    def __init__(self, message: str, details: Any = None):
        self.message = message
        self.details = details
        super().__init__(message)


class ConfigurationError(RemoteProverError):
    """Missing or invalid service configuration. Raised at construction."""

    pass


class SubmissionError(RemoteProverError):
    """The proof service rejected or could not accept a submission."""

    pass


class QueryError(RemoteProverError):
    """A status query against the proof service failed.

    Transient errors (network failures, 5xx, 429, malformed bodies) only cost
    the current poll tick. Non-transient errors end the call.
    """

    def __init__(self, message: str, transient: bool = True, details: Any = None):
        self.transient = transient
        super().__init__(message, details=details)


class ProofFailedError(RemoteProverError):
    """The service reported a terminal non-success status for a proof."""

    def __init__(self, proof_id: str, status: str):
        self.proof_id = proof_id
        self.status = status
        super().__init__(
            message=f"could not generate proof {proof_id}: status={status}",
            details={"proof_id": proof_id, "status": status},
        )


class BatchProofFailedError(RemoteProverError):
    """At least one member of a batch reached a terminal failure."""

    def __init__(self, batch_id: str, failed_count: int, succeeded_count: int):
        self.batch_id = batch_id
        self.failed_count = failed_count
        self.succeeded_count = succeeded_count
        super().__init__(
            message=(
                f"batch proof {batch_id} failed: nb_failed={failed_count}, "
                f"nb_success={succeeded_count}"
            ),
            details={
                "batch_id": batch_id,
                "failed_count": failed_count,
                "succeeded_count": succeeded_count,
            },
        )


class ProverTimeoutError(RemoteProverError):
    """Poll budget exhausted before a terminal status was observed."""

    pass


class ProofTimeoutError(ProverTimeoutError):
    def __init__(self, proof_id: str, last_status: str, max_polls: int):
        self.proof_id = proof_id
        self.last_status = last_status
        self.max_polls = max_polls
        super().__init__(
            message=(
                f"proof {proof_id} timed out after {max_polls} polls: "
                f"status={last_status}"
            ),
            details={
                "proof_id": proof_id,
                "last_status": last_status,
                "max_polls": max_polls,
            },
        )


class BatchTimeoutError(ProverTimeoutError):
    def __init__(self, batch_id: str, max_polls: int):
        self.batch_id = batch_id
        self.max_polls = max_polls
        super().__init__(
            message=f"batch proof {batch_id} timed out after {max_polls} polls",
            details={"batch_id": batch_id, "max_polls": max_polls},
        )


class BatchInvariantError(RemoteProverError):
    """The service reported a batch summary that cannot occur under its contract."""

    def __init__(self, batch_id: str | None, statuses: dict[str, int], batch_size: int):
        self.batch_id = batch_id
        self.statuses = statuses
        self.batch_size = batch_size
        super().__init__(
            message=(
                f"inconsistent status summary for batch {batch_id}: "
                f"statuses={statuses}, batch_size={batch_size}"
            ),
            details={
                "batch_id": batch_id,
                "statuses": statuses,
                "batch_size": batch_size,
            },
        )
