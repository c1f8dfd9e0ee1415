"""API routes for the triage service."""

import logging

from fastapi import APIRouter, HTTPException, Request
from slowapi import Limiter
from slowapi.util import get_remote_address

from inbox_triage.api.schemas import HealthResponse, RunRequest, RunResponse

logger = logging.getLogger(__name__)

router = APIRouter()


def get_client_ip(request: Request) -> str:
    """Get client IP, honouring X-Forwarded-For behind a proxy."""
    forwarded_for = request.headers.get("X-Forwarded-For")
    if forwarded_for:
        # X-Forwarded-For can contain multiple IPs: "client, proxy1, proxy2"
        return forwarded_for.split(",")[0].strip()
    return get_remote_address(request)


# Shared with main.py through app.state.limiter
limiter = Limiter(key_func=get_client_ip, default_limits=["100/minute"])


@router.get("/health", response_model=HealthResponse)
@limiter.limit("60/minute")
async def health_check(request: Request) -> HealthResponse:
    """Health check endpoint."""
    return HealthResponse(status="healthy", version=request.app.state.settings.app_version)


@router.post("/runs", response_model=RunResponse)
@limiter.limit("10/minute")  # Each run calls the LLM once or more per email
def start_run(request: Request, run_request: RunRequest) -> RunResponse:
    """
    Run one triage pass synchronously and return its summary.

    Per-email failures are reported inside the summary; only an
    unexpected pipeline error yields a 500.
    """
    pipeline = request.app.state.pipeline
    logger.info(
        f"Triage run requested (max_emails={run_request.max_emails}, "
        f"timeout={run_request.timeout_seconds})"
    )

    try:
        summary = pipeline.run(
            max_emails=run_request.max_emails,
            timeout_seconds=run_request.timeout_seconds,
        )
    except Exception:
        logger.exception("Triage run failed")
        raise HTTPException(
            status_code=500,
            detail="Triage run failed. Please try again.",
        )

    return RunResponse.from_summary(summary)
