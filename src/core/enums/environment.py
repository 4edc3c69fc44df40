"""Application environment types.

Used by Settings to pick environment-specific behaviour (log renderer,
table bootstrap, debug output).

Environments:
- DEVELOPMENT: Local development, console log renderer
- TESTING: Automated test execution (sqlite/aiosqlite)
- CI: Continuous integration
- PRODUCTION: Production deployment, JSON logs
"""

from enum import Enum


class Environment(str, Enum):
    """Application environment types."""

    DEVELOPMENT = "development"
    TESTING = "testing"
    CI = "ci"
    PRODUCTION = "production"
