"""
Proof endpoints of the mock proof server.

Mirror the routes consumed by HttpProofService so the client can be
exercised end to end without a real proving service.
"""

import logging

from fastapi import APIRouter, Request

from mock_server.models import SubmitBatchRequest, SubmitProofResponse
from remote_prover.models import (
    BatchStatusSummary,
    BatchSubmission,
    ProofRecord,
    ProofRequest,
)
from remote_prover.services import MockProofService

logger = logging.getLogger(__name__)

router = APIRouter()


def _service(request: Request) -> MockProofService:
    return request.app.state.proof_service


@router.post(
    "/proof/new",
    response_model=SubmitProofResponse,
    summary="Submit Proof Request",
    responses={400: {"description": "Request rejected"}},
)
async def submit_proof(body: ProofRequest, request: Request) -> SubmitProofResponse:
    proof_id = await _service(request).submit(body)
    return SubmitProofResponse(proof_id=proof_id)


@router.get(
    "/proof/{proof_id}",
    response_model=ProofRecord,
    summary="Get Proof Request",
    responses={404: {"description": "Proof ID not found"}},
)
async def get_proof(proof_id: str, request: Request) -> ProofRecord:
    return await _service(request).get(proof_id)


@router.post(
    "/proof/batch/new",
    response_model=BatchSubmission,
    summary="Submit Proof Batch",
    description="""
Submit several proof requests at once.

Proof IDs in the response are in the same order as the submitted requests.
Use GET /proof/batch/status/{batch_id} to poll for completion.
""",
    responses={400: {"description": "Batch rejected"}},
)
async def submit_batch(body: SubmitBatchRequest, request: Request) -> BatchSubmission:
    return await _service(request).submit_batch(body.requests)


@router.get(
    "/proof/batch/status/{batch_id}",
    response_model=BatchStatusSummary,
    summary="Get Proof Batch Status",
    responses={404: {"description": "Batch ID not found"}},
)
async def get_batch_status(batch_id: str, request: Request) -> BatchStatusSummary:
    return await _service(request).get_batch(batch_id)
