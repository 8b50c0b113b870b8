"""Liveness and readiness probe resources.

Usage
-----
Import health resources for route registration::

    from contribgate.api.health.resources import HealthResource, ReadyResource
"""
