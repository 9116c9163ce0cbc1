from oid4vc_verifier_frontend.adapter.output.persistence.in_memory_session import (
    InMemorySession,
    InMemorySessionStore,
)

__all__ = ["InMemorySession", "InMemorySessionStore"]
