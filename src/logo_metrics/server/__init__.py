"""HTTP service for logo analysis."""

from logo_metrics.server.app import create_app

__all__ = ["create_app"]
