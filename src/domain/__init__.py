"""Domain layer - identity, lockout and session rules.

Pure Python; no framework or infrastructure imports.

Structure:
- entities/: User and Session
- value_objects/: Claim set, lockout state and policy, session descriptors
- enums/: Roles, account status, device types, verification failures
- errors/: Typed authentication and session errors
- protocols/: Ports implemented by infrastructure adapters
- events/: Domain events
"""
