"""Pydantic models for proof requests, records and prover outputs."""

from enum import Enum
from typing import Annotated, Literal, Optional, Union

from pydantic import (
    BaseModel,
    BeforeValidator,
    Field,
    PlainSerializer,
    field_validator,
    model_validator,
)

ProofId = str
BatchId = str


def _parse_hex(value) -> bytes:
    if isinstance(value, (bytes, bytearray)):
        return bytes(value)
    if isinstance(value, str):
        text = value[2:] if value.startswith(("0x", "0X")) else value
        try:
            return bytes.fromhex(text)
        except ValueError as e:
            raise ValueError(f"invalid hex string: {value!r}") from e
    raise ValueError(f"expected bytes or hex string, got {type(value).__name__}")


# Opaque binary blob, "0x"-prefixed hex on the wire
HexBytes = Annotated[
    bytes,
    BeforeValidator(_parse_hex),
    PlainSerializer(lambda b: "0x" + b.hex(), return_type=str),
]


class ProofRequestStatus(str, Enum):
    """Status of a proof request as reported by the proof service."""

    PENDING = "pending"
    RUNNING = "running"
    SUCCESS = "success"
    FAILURE = "failure"
    CANCELLED = "cancelled"
    # Catch-all for statuses this client does not know; treated as terminal
    UNKNOWN = "unknown"

    @classmethod
    def _missing_(cls, value):
        if isinstance(value, str):
            return cls.UNKNOWN
        return None

    @property
    def is_terminal(self) -> bool:
        return self not in (ProofRequestStatus.PENDING, ProofRequestStatus.RUNNING)

    @property
    def is_failure(self) -> bool:
        """Terminal and not successful."""
        return self.is_terminal and self is not ProofRequestStatus.SUCCESS


class ProofRequest(BaseModel):
    """A circuit identifier plus the public input to prove it against."""

    circuit_id: str = Field(..., alias="release_id", min_length=1)
    public_input: HexBytes = Field(..., alias="input")

    model_config = {"populate_by_name": True, "frozen": True}


class ProofResult(BaseModel):
    """Proof bytes and circuit output of a successful request."""

    proof: HexBytes
    output: HexBytes

    model_config = {"frozen": True}


class ProofRecord(BaseModel):
    """
    Service-side record of a single proof request.

    Attributes:
        id: Proof ID assigned at submission
        status: Current status
        result: Proof and output, present iff status is success
        raw_status: Status string as sent by the service, kept when it
            is not one of the known statuses
    """

    id: ProofId
    status: ProofRequestStatus
    result: Optional[ProofResult] = None
    raw_status: Optional[str] = Field(default=None, exclude=True)

    @model_validator(mode="before")
    @classmethod
    def _keep_raw_status(cls, data):
        if isinstance(data, dict) and "raw_status" not in data:
            status = data.get("status")
            if isinstance(status, str) and not isinstance(status, ProofRequestStatus):
                data = {**data, "raw_status": status}
        return data

    @property
    def reported_status(self) -> str:
        """Status as the service reported it."""
        if self.status is ProofRequestStatus.UNKNOWN and self.raw_status:
            return self.raw_status
        return self.status.value

    @model_validator(mode="after")
    def _result_iff_success(self) -> "ProofRecord":
        has_result = self.result is not None
        if has_result != (self.status is ProofRequestStatus.SUCCESS):
            raise ValueError(
                f"record {self.id} has status={self.status.value} "
                f"but result {'present' if has_result else 'missing'}"
            )
        return self


class BatchSubmission(BaseModel):
    """Response of a batch submission: batch ID plus per-item proof IDs in input order."""

    batch_id: BatchId
    proof_ids: list[ProofId]


class BatchStatusSummary(BaseModel):
    """Number of batch items currently in each status."""

    statuses: dict[ProofRequestStatus, Annotated[int, Field(ge=0)]] = Field(
        default_factory=dict
    )

    @field_validator("statuses", mode="before")
    @classmethod
    def _merge_unknown_statuses(cls, value):
        # Several unrecognised keys all map to UNKNOWN; sum them instead of
        # letting the last one win.
        if not isinstance(value, dict):
            return value
        merged: dict = {}
        for key, count in value.items():
            status = ProofRequestStatus(key)
            if status is ProofRequestStatus.UNKNOWN and status in merged:
                merged[status] = int(merged[status]) + int(count)
            else:
                merged[status] = count
        return merged

    def count(self, status: ProofRequestStatus) -> int:
        return self.statuses.get(status, 0)

    @property
    def total(self) -> int:
        return sum(self.statuses.values())

    def present(self) -> set[ProofRequestStatus]:
        """Statuses with a non-zero count."""
        return {status for status, count in self.statuses.items() if count > 0}


class LocalOutput(BaseModel):
    """Proof and output fetched inline (single-proof success)."""

    kind: Literal["local"] = "local"
    proof: HexBytes
    output: HexBytes

    model_config = {"frozen": True}


class RemoteOutput(BaseModel):
    """Handle to results that stay on the proof service (batch success)."""

    kind: Literal["remote"] = "remote"
    proof_ids: list[ProofId]

    model_config = {"frozen": True}


ProverOutput = Annotated[Union[LocalOutput, RemoteOutput], Field(discriminator="kind")]
