# store_rating/models/__init__.py
"""
Database models module initialization.
Exports all database models for convenient imports throughout the application.

Models exported:
- User: Account, credentials and role (credential store)
- Role: Closed enum of account roles
- Store: Store record with denormalized rating aggregate (store directory)
- Rating: One rating per (user, store) pair (rating ledger)
"""
from .user import User, Role
from .store import Store
from .rating import Rating
