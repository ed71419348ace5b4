"""Ingestion layer.

This package contains the helpers that turn untrusted catalog payloads
into normalized domain objects.
"""

__all__: list[str] = []
