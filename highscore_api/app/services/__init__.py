"""
Service layer abstraction.

Each service encapsulates the storage logic for a domain so that the
API handlers never touch the database directly.
"""
