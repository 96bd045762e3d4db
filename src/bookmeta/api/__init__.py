"""HTTP API for bookmeta."""

from bookmeta.api.app import create_app

__all__ = ["create_app"]
