"""Application layer - Use cases and orchestration.

This layer contains the identity core's use cases following the CQRS pattern:
- Commands: Write operations (reconcile identity, record failures, open and
  revoke sessions)
- Queries: Read operations (current user, active sessions)
- DTOs: Handler results handed to the presentation layer

The application layer orchestrates domain logic but contains no business rules.
"""
