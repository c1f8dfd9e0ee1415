"""HTTP API for triggering triage runs."""

from inbox_triage.api.routes import limiter, router

__all__ = ["limiter", "router"]
