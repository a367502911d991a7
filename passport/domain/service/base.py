"""Marker base for domain services."""


class Service:
    """Stateless coordinator of identity rules over repositories and ports."""
