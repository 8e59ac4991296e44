"""
Infrastructure layer - External adapters for the recognition engine.

This layer contains:
- PostgreSQL adapters (ledger, audit log)
- In-memory stubs for every port
- Observability (structured logging, correlation IDs)

IMPORT RULES:
- CAN import from: domain, application
- Implements ports defined in application layer
"""
