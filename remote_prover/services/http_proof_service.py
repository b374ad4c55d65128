"""
HttpProofService - Remote proof service client over HTTP.

Implements the ProofService contract with an httpx.AsyncClient that is
pinned to the addresses resolved when the prover was constructed.
"""

import logging
from typing import Sequence

import httpx
from pydantic import ValidationError

from remote_prover.exceptions import QueryError, SubmissionError
from remote_prover.models import (
    BatchId,
    BatchStatusSummary,
    BatchSubmission,
    ProofId,
    ProofRecord,
    ProofRequest,
)
from .proof_service import ProofService

logger = logging.getLogger(__name__)

SUBMIT_PROOF_ROUTE = "/proof/new"
GET_PROOF_ROUTE = "/proof/{proof_id}"
SUBMIT_PROOF_BATCH_ROUTE = "/proof/batch/new"
GET_PROOF_BATCH_ROUTE = "/proof/batch/status/{batch_id}"


def _is_transient(error: httpx.HTTPError, retry_not_found: bool = False) -> bool:
    """Network failures, 5xx and 429 are worth another poll; other 4xx are not."""
    if isinstance(error, httpx.HTTPStatusError):
        code = error.response.status_code
        if code == 404:
            return retry_not_found
        return code >= 500 or code == 429
    return True


def _describe(error: httpx.HTTPError) -> dict:
    details = {"error": str(error) or type(error).__name__}
    if isinstance(error, httpx.HTTPStatusError):
        details["status_code"] = error.response.status_code
        details["body"] = error.response.text[:500]
    return details


class HttpProofService(ProofService):
    """Proof service reached over HTTP."""

    def __init__(self, client: httpx.AsyncClient):
        self._client = client

    @property
    def service_name(self) -> str:
        return "http"

    async def _post(self, route: str, payload: dict) -> dict:
        try:
            response = await self._client.post(route, json=payload)
            response.raise_for_status()
            return response.json()
        except httpx.HTTPError as e:
            logger.error(f"Proof service rejected POST {route}: {e}")
            raise SubmissionError(
                f"Proof submission failed: {e}", details=_describe(e)
            ) from e
        except ValueError as e:
            raise SubmissionError(f"Malformed response from POST {route}") from e

    async def _get(self, route: str, retry_not_found: bool = False) -> dict:
        try:
            response = await self._client.get(route)
            response.raise_for_status()
            return response.json()
        except httpx.HTTPError as e:
            raise QueryError(
                f"Status query failed: GET {route}: {e}",
                transient=_is_transient(e, retry_not_found),
                details=_describe(e),
            ) from e
        except ValueError as e:
            raise QueryError(f"Malformed response from GET {route}") from e

    async def submit(self, request: ProofRequest) -> ProofId:
        body = await self._post(
            SUBMIT_PROOF_ROUTE, request.model_dump(mode="json", by_alias=True)
        )
        try:
            proof_id = body["proof_id"]
        except (KeyError, TypeError) as e:
            raise SubmissionError(
                "Proof service response has no proof_id", details=body
            ) from e
        logger.debug(f"Submitted proof request: proof_id={proof_id}")
        return proof_id

    async def get(self, proof_id: ProofId) -> ProofRecord:
        body = await self._get(GET_PROOF_ROUTE.format(proof_id=proof_id))
        try:
            return ProofRecord.model_validate(body)
        except ValidationError as e:
            raise QueryError(
                f"Invalid proof record for {proof_id}", details=e.errors()
            ) from e

    async def submit_batch(self, requests: Sequence[ProofRequest]) -> BatchSubmission:
        payload = {
            "requests": [r.model_dump(mode="json", by_alias=True) for r in requests]
        }
        body = await self._post(SUBMIT_PROOF_BATCH_ROUTE, payload)
        try:
            return BatchSubmission.model_validate(body)
        except ValidationError as e:
            raise SubmissionError(
                "Invalid batch submission response", details=e.errors()
            ) from e

    async def get_batch(self, batch_id: BatchId) -> BatchStatusSummary:
        # A freshly created batch may not be visible to status queries yet
        body = await self._get(
            GET_PROOF_BATCH_ROUTE.format(batch_id=batch_id), retry_not_found=True
        )
        try:
            return BatchStatusSummary.model_validate(body)
        except ValidationError as e:
            raise QueryError(
                f"Invalid status summary for batch {batch_id}", details=e.errors()
            ) from e

    async def aclose(self) -> None:
        await self._client.aclose()
