"""Proof service implementations and selection."""

from .proof_service import ProofService
from .http_proof_service import HttpProofService
from .mock_proof_service import MockProofService
from .service_factory import create_proof_service

__all__ = [
    "ProofService",
    "HttpProofService",
    "MockProofService",
    "create_proof_service",
]
