"""Client-side orchestration of remote proof generation."""

from .config import ProverConfig, load_config
from .exceptions import (
    BatchInvariantError,
    BatchProofFailedError,
    BatchTimeoutError,
    ConfigurationError,
    ProofFailedError,
    ProofTimeoutError,
    ProverTimeoutError,
    QueryError,
    RemoteProverError,
    SubmissionError,
)
from .models import (
    BatchStatusSummary,
    LocalOutput,
    ProofRecord,
    ProofRequest,
    ProofRequestStatus,
    ProverOutput,
    RemoteOutput,
)
from .prover import RemoteProver

__all__ = [
    "RemoteProver",
    "ProverConfig",
    "load_config",
    "ProofRequest",
    "ProofRequestStatus",
    "ProofRecord",
    "BatchStatusSummary",
    "ProverOutput",
    "LocalOutput",
    "RemoteOutput",
    "RemoteProverError",
    "ConfigurationError",
    "SubmissionError",
    "QueryError",
    "ProofFailedError",
    "BatchProofFailedError",
    "ProverTimeoutError",
    "ProofTimeoutError",
    "BatchTimeoutError",
    "BatchInvariantError",
]
