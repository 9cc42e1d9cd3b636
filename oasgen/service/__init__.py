"""HTTP service mode for oasgen."""

from .app import OPENAPI_MEDIA_TYPE, create_app, run_service

__all__ = ["OPENAPI_MEDIA_TYPE", "create_app", "run_service"]
