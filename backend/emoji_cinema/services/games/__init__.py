"""Game domain services: rooms, scoring and scene replication.

This package contains pure domain logic that is driven by the Socket.IO
handlers, keeping transport concerns separated from core game mechanics.
"""
