"""ZK attendance bridge.

Reads punches from a ZKTeco terminal under exclusive, self-healing access,
turns them into daily work-time summaries and live presence, and pushes the
summaries to the HR cloud once a day or on demand.
"""
from __future__ import annotations

from .container import Container, build_container
from .main import create_app

__all__ = ["Container", "build_container", "create_app"]
