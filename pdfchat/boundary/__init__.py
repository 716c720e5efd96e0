"""
Boundary layer for external system integrations.

Handles all interactions with external systems (database, filesystem).
Provides adapters and clients for infrastructure dependencies.
"""
