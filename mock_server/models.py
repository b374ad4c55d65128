"""Pydantic request/response bodies of the mock proof server."""

from pydantic import BaseModel, Field

from remote_prover.models import ProofRequest


class SubmitProofResponse(BaseModel):
    """Response body for POST /proof/new."""

    proof_id: str


class SubmitBatchRequest(BaseModel):
    """Request body for POST /proof/batch/new."""

    requests: list[ProofRequest] = Field(..., min_length=1)
