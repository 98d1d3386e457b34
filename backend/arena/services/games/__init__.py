"""Game domain services: board rules and the session directory.

This package contains pure(ish) domain logic that is imported by the
Socket.IO handlers and HTTP routes, keeping transport concerns separated
from core game mechanics.
"""
