"""Role claim propagation protocol (port).

Propagating the authoritative role to the identity provider is best-effort
and must never block or fail the request that triggered it. Implementations
hand the work to a background worker with its own retry policy.
"""

from typing import Protocol


class RoleClaimSyncProtocol(Protocol):
    """Background role-claim propagation port."""

    def enqueue(self, subject_id: str, role: str) -> bool:
        """Schedule propagation without waiting for it.

        Args:
            subject_id: Identity provider subject id.
            role: Authoritative role.

        Returns:
            bool: False if the work could not be queued (logged, not raised).
        """
        ...
