"""
Repository layer for data access.

Provides data access abstractions following the Repository pattern,
isolating database access from business logic. Each repository takes
the session it works in through its constructor.
"""
