"""remote-prover command - submit proofs to the configured proof service.

Usage:
    remote-prover prove <circuit_id> <input_hex> [<input_hex> ...]
    remote-prover fetch <proof_id>

Configuration is read from the environment (PROOF_SERVICE_URL, ...).

Exit codes:
    0 - Proof(s) generated
    2 - Configuration error
    3 - Submission rejected
    4 - Status query failed
    5 - Proof failed on the service
    6 - Timed out waiting for the service
    7 - Service reported an inconsistent batch status
"""

import asyncio
import json
import logging
import sys

import click

from .config import load_config
from .exceptions import (
    BatchInvariantError,
    BatchProofFailedError,
    ConfigurationError,
    ProofFailedError,
    ProverTimeoutError,
    QueryError,
    RemoteProverError,
    SubmissionError,
)
from .models import LocalOutput, RemoteOutput
from .prover import RemoteProver

EXIT_OK = 0
EXIT_CONFIG = 2
EXIT_SUBMISSION = 3
EXIT_QUERY = 4
EXIT_PROOF_FAILED = 5
EXIT_TIMEOUT = 6
EXIT_INVARIANT = 7


def error_to_exit_code(error: RemoteProverError) -> int:
    if isinstance(error, ConfigurationError):
        return EXIT_CONFIG
    if isinstance(error, SubmissionError):
        return EXIT_SUBMISSION
    if isinstance(error, QueryError):
        return EXIT_QUERY
    if isinstance(error, (ProofFailedError, BatchProofFailedError)):
        return EXIT_PROOF_FAILED
    if isinstance(error, ProverTimeoutError):
        return EXIT_TIMEOUT
    if isinstance(error, BatchInvariantError):
        return EXIT_INVARIANT
    return 1


def _parse_hex_input(value: str) -> bytes:
    text = value[2:] if value.startswith(("0x", "0X")) else value
    try:
        return bytes.fromhex(text)
    except ValueError:
        raise click.BadParameter(f"not a hex string: {value!r}")


async def _run_prove(circuit_id: str, inputs: list[bytes]):
    config = load_config()
    async with RemoteProver(config) as prover:
        if len(inputs) == 1:
            return await prover.prove(circuit_id, inputs[0])
        return await prover.batch_prove(circuit_id, inputs)


async def _run_fetch(proof_id: str) -> LocalOutput:
    config = load_config()
    async with RemoteProver(config) as prover:
        return await prover.get_proof(proof_id)


def _emit(output: LocalOutput | RemoteOutput) -> None:
    click.echo(json.dumps(output.model_dump(mode="json"), indent=2))


def _fail(error: RemoteProverError) -> None:
    click.echo(
        json.dumps(
            {"error": type(error).__name__, "message": error.message, "details": error.details},
            indent=2,
            default=str,
        ),
        err=True,
    )
    sys.exit(error_to_exit_code(error))


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Log every poll.")
def cli(verbose: bool) -> None:
    """Generate proofs on a remote proof service."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@cli.command()
@click.argument("circuit_id")
@click.argument("inputs", nargs=-1, required=True)
def prove(circuit_id: str, inputs: tuple[str, ...]) -> None:
    """Prove one input (inline result) or several (batch, results stay remote)."""
    public_inputs = [_parse_hex_input(value) for value in inputs]
    try:
        output = asyncio.run(_run_prove(circuit_id, public_inputs))
    except RemoteProverError as e:
        _fail(e)
        return
    _emit(output)


@cli.command()
@click.argument("proof_id")
def fetch(proof_id: str) -> None:
    """Fetch the proof and output of a completed request."""
    try:
        output = asyncio.run(_run_fetch(proof_id))
    except RemoteProverError as e:
        _fail(e)
        return
    _emit(output)


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
