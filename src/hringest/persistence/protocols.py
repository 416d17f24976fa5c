"""Re-export persistence protocols from core for convenience."""

from __future__ import annotations

from hringest.core.protocols import IAuditStore, IRecordStore

__all__ = ["IAuditStore", "IRecordStore"]
