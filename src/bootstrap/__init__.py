"""Composition root for process-start wiring.

This package centralizes infrastructure-aware wiring (logging, database)
so the API and application layers depend on ports only.
"""
