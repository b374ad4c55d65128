"""Unit tests for the RemoteProver facade."""

import socket
from unittest.mock import patch

import pytest

from remote_prover.config import ProverConfig
from remote_prover.exceptions import (
    BatchProofFailedError,
    BatchTimeoutError,
    ConfigurationError,
    ProofFailedError,
    ProofTimeoutError,
    SubmissionError,
)
from remote_prover.models import (
    BatchSubmission,
    LocalOutput,
    ProofRequestStatus,
    RemoteOutput,
)
from remote_prover.prover import RemoteProver
from remote_prover.services import HttpProofService, MockProofService

PENDING = ProofRequestStatus.PENDING
SUCCESS = ProofRequestStatus.SUCCESS
FAILURE = ProofRequestStatus.FAILURE


class TestProve:
    """Tests for RemoteProver.prove."""

    @pytest.mark.asyncio
    async def test_prove_returns_local_output(
        self, config, scripted_service, make_record, no_sleep
    ):
        service = scripted_service(records=[make_record(PENDING), make_record(SUCCESS)])
        prover = RemoteProver(config, service=service)

        output = await prover.prove("circuit-a", b"\x01")

        assert isinstance(output, LocalOutput)
        assert output.proof == b"\x01\x02proof"
        assert service.submitted[0].circuit_id == "circuit-a"
        assert service.get_calls == 2

    @pytest.mark.asyncio
    async def test_prove_jitters_before_submitting_then_polls_every_ten_seconds(
        self, config, scripted_service, make_record, no_sleep
    ):
        service = scripted_service(records=[make_record(SUCCESS)])
        prover = RemoteProver(config, service=service)

        await prover.prove("circuit-a", b"\x01")

        delays = [c.args[0] for c in no_sleep.await_args_list]
        assert len(delays) == 2
        assert 0 <= delays[0] < 5
        assert delays[1] == 10

    @pytest.mark.asyncio
    async def test_prove_timeout_uses_single_proof_budget(
        self, scripted_service, make_record, no_sleep
    ):
        config = ProverConfig(
            _env_file=None,
            PROOF_SERVICE_URL="https://prover.example.com",
            PROOF_TIMEOUT_SECS=40,
            PROOF_BATCH_TIMEOUT_SECS=3600,
        )
        service = scripted_service(records=[make_record(PENDING)])

        with pytest.raises(ProofTimeoutError):
            await RemoteProver(config, service=service).prove("circuit-a", b"\x01")

        assert service.get_calls == 4

    @pytest.mark.asyncio
    async def test_prove_remote_failure(
        self, config, scripted_service, make_record, no_sleep
    ):
        service = scripted_service(records=[make_record(FAILURE)])

        with pytest.raises(ProofFailedError) as exc_info:
            await RemoteProver(config, service=service).prove("circuit-a", b"\x01")

        assert exc_info.value.proof_id == "proof_1"

    @pytest.mark.asyncio
    async def test_prove_submission_error_is_raised_not_fatal(
        self, config, scripted_service, no_sleep
    ):
        service = scripted_service()

        async def reject(request):
            raise SubmissionError("overloaded")

        service.submit = reject

        with pytest.raises(SubmissionError):
            await RemoteProver(config, service=service).prove("circuit-a", b"\x01")

        assert service.get_calls == 0


class TestBatchProve:
    """Tests for RemoteProver.batch_prove."""

    @pytest.mark.asyncio
    async def test_batch_prove_preserves_input_order(
        self, config, scripted_service, make_summary, no_sleep
    ):
        service = scripted_service(
            summaries=[make_summary(pending=3), make_summary(success=3)],
            submission=BatchSubmission(batch_id="b1", proof_ids=["idA", "idB", "idC"]),
        )
        prover = RemoteProver(config, service=service)

        output = await prover.batch_prove("circuit-b", [b"A", b"B", b"C"])

        assert isinstance(output, RemoteOutput)
        assert output.proof_ids == ["idA", "idB", "idC"]
        assert [r.public_input for r in service.submitted_batches[0]] == [b"A", b"B", b"C"]

    @pytest.mark.asyncio
    async def test_batch_prove_does_not_jitter(
        self, config, scripted_service, make_summary, no_sleep
    ):
        service = scripted_service(summaries=[make_summary(success=2)])

        await RemoteProver(config, service=service).batch_prove("c", [b"A", b"B"])

        assert [c.args[0] for c in no_sleep.await_args_list] == [10]

    @pytest.mark.asyncio
    async def test_batch_prove_failure(
        self, config, scripted_service, make_summary, no_sleep
    ):
        service = scripted_service(summaries=[make_summary(success=3, failure=1)])

        with pytest.raises(BatchProofFailedError) as exc_info:
            await RemoteProver(config, service=service).batch_prove(
                "c", [b"1", b"2", b"3", b"4"]
            )

        assert (exc_info.value.failed_count, exc_info.value.succeeded_count) == (1, 3)

    @pytest.mark.asyncio
    async def test_batch_prove_timeout_uses_batch_budget(
        self, scripted_service, make_summary, no_sleep
    ):
        config = ProverConfig(
            _env_file=None,
            PROOF_SERVICE_URL="https://prover.example.com",
            PROOF_TIMEOUT_SECS=3600,
            PROOF_BATCH_TIMEOUT_SECS=60,
        )
        service = scripted_service(summaries=[make_summary(running=2)])

        with pytest.raises(BatchTimeoutError):
            await RemoteProver(config, service=service).batch_prove("c", [b"A", b"B"])

        assert service.get_batch_calls == 6


class TestGetProof:
    """Tests for RemoteProver.get_proof."""

    @pytest.mark.asyncio
    async def test_get_proof_materializes_success(
        self, config, scripted_service, make_record
    ):
        service = scripted_service(records=[make_record(SUCCESS, proof_id="idB")])

        output = await RemoteProver(config, service=service).get_proof("idB")

        assert output == LocalOutput(proof=b"\x01\x02proof", output=b"\x03output")

    @pytest.mark.asyncio
    async def test_get_proof_of_unfinished_request_fails(
        self, config, scripted_service, make_record
    ):
        service = scripted_service(records=[make_record(PENDING, proof_id="idB")])

        with pytest.raises(ProofFailedError) as exc_info:
            await RemoteProver(config, service=service).get_proof("idB")

        assert exc_info.value.status == "pending"


class TestConstruction:
    """Tests for service selection at construction."""

    def test_http_service_is_built_from_config(self, config):
        with patch(
            "remote_prover.resolver.socket.getaddrinfo",
            return_value=[(socket.AF_INET, socket.SOCK_STREAM, 6, "", ("10.0.0.1", 443))],
        ) as mock_resolve:
            prover = RemoteProver(config)

        assert isinstance(prover.service, HttpProofService)
        mock_resolve.assert_called_once()

    def test_mock_service_is_built_when_enabled(self):
        config = ProverConfig(_env_file=None, USE_MOCK_PROOF_SERVICE=True)

        prover = RemoteProver(config)

        assert isinstance(prover.service, MockProofService)

    def test_unresolvable_service_fails_at_construction(self, config):
        with patch(
            "remote_prover.resolver.socket.getaddrinfo",
            side_effect=socket.gaierror(-2, "Name or service not known"),
        ):
            with pytest.raises(ConfigurationError):
                RemoteProver(config)

    @pytest.mark.asyncio
    async def test_context_manager_closes_service(self, config, scripted_service):
        service = scripted_service()

        async with RemoteProver(config, service=service) as prover:
            assert prover.service is service

        assert service.closed is True
