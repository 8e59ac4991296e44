"""
Application layer - Use cases and orchestration for the recognition engine.

This layer contains:
- Application services (recognition, chain verification, fraud risk)
- Port definitions (abstract interfaces for infrastructure)

IMPORT RULES:
- CAN import from: domain, config
- CANNOT import from: infrastructure, api
"""
