"""
Top‑level package for the Car Dealership API.

The HTTP application lives in ``dealership_api.app`` and a small
``requests`` based client for talking to a running instance lives in
``dealership_api.client``.
"""

__all__ = []
