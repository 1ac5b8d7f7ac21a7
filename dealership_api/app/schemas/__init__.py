"""
Pydantic schema definitions for API payloads.

Each domain (dealerships, car models, car prices) defines its own
Pydantic models for request and response bodies.  Schemas are separated
from the database layer to decouple API representation from
persistence.  Response models embed their children (a dealership lists
its car models, a car model lists its prices) while children only carry
the id of their parent, so serialized graphs never contain cycles.
"""
