"""
Core application modules.
Contains essential infrastructure components:
- bootstrap: Application initialization and default admin creation
- db: Database configuration and connection management
- errors: Domain error taxonomy rendered as HTTP errors
- pagination: Search / sort / offset pagination helpers for list endpoints
- security: Password hashing, password policy and JWT tokens
"""
