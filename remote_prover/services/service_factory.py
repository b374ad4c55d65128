"""
Proof service factory.

Returns the ProofService matching USE_MOCK_PROOF_SERVICE: the in-process
mock, or the HTTP service over an address-pinned client.
"""

import logging

from remote_prover.config import ProverConfig
from remote_prover.resolver import build_pinned_client, resolve_service_endpoint
from .http_proof_service import HttpProofService
from .mock_proof_service import MockProofService
from .proof_service import ProofService

logger = logging.getLogger(__name__)


def create_proof_service(config: ProverConfig) -> ProofService:
    """
    Build the proof service described by the configuration.

    Resolves the service host once (blocking) when the HTTP service is used.

    Raises:
        ConfigurationError: If the service URL is malformed or unresolvable
    """
    if config.USE_MOCK_PROOF_SERVICE:
        logger.info(
            "Initializing MockProofService (USE_MOCK_PROOF_SERVICE=true) - "
            "simulated proof lifecycle, no proofs are computed"
        )
        return MockProofService()

    endpoint = resolve_service_endpoint(config.PROOF_SERVICE_URL)
    client = build_pinned_client(
        endpoint,
        api_key=config.PROOF_SERVICE_API_KEY,
        timeout=config.HTTP_TIMEOUT_SECS,
    )
    logger.info(f"Initializing HttpProofService for {endpoint.base_url}")
    return HttpProofService(client)
