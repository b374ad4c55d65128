"""
Mock Proof Service API

FastAPI application simulating a remote proving service for local development.
Run with: uvicorn mock_server.main:app --port 8080
"""

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI

from mock_server.config import settings
from mock_server.error_handler import ErrorHandlerMiddleware
from mock_server.routes import proofs
from remote_prover.services import MockProofService


def create_app(service: Optional[MockProofService] = None) -> FastAPI:
    """
    Build the mock server around a MockProofService.

    Args:
        service: Service to expose; built from settings when omitted
    """
    proof_service = service or MockProofService(
        queue_delay=(0.0, settings.MOCK_QUEUE_DELAY_SECS),
        run_delay=(0.0, settings.MOCK_RUN_DELAY_SECS),
        failure_rate=settings.MOCK_FAILURE_RATE,
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan manager for startup/shutdown events."""
        yield
        # Shutdown
        await proof_service.aclose()

    app = FastAPI(
        title="Mock Proof Service API",
        description="Simulated remote proving service (no proofs are computed)",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.proof_service = proof_service

    # Error handling middleware
    app.add_middleware(ErrorHandlerMiddleware)

    app.include_router(proofs.router, tags=["Proofs"])

    @app.get("/health")
    async def health_check():
        """Health check endpoint"""
        return {"status": "healthy", "service": proof_service.service_name}

    return app


app = create_app()
