"""
Core Census Components.

Contains the pure building blocks of the ingestion pipeline, separated
from storage and HTTP concerns.

Structure:
    models/: Pure data structures (no business logic)
    logic/: Validation and derivation logic operating on models
    errors.py: Error codes and HTTP status mapping

Nothing in this package touches the database or the network.
"""
