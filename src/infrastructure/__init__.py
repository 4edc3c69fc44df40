"""Infrastructure layer - Adapters and external integrations.

This layer contains implementations of domain protocols (ports):
- Database repositories (users, sessions, role profiles)
- Identity provider adapter and role claim propagation (firebase-admin)
- Session enrichers (user-agent parsing, GeoIP)
- Event bus and structured logging

Structure:
- persistence/: SQLAlchemy models, repositories and the Database wrapper
- identity/: Firebase identity provider and claim sync worker
- enrichers/: Device and location enrichment
- events/: In-memory event bus and logging handler
- logging/: structlog console adapter and redaction

The infrastructure layer depends on the domain layer (implements protocols)
but the domain layer does NOT depend on infrastructure.
"""
