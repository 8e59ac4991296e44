"""Domain primitives for the recognition engine.

- DeletePreventionMixin: Prevents deletion of append-only ledger entities
"""

from src.domain.primitives.prevent_delete import DeletePreventionMixin

__all__: list[str] = ["DeletePreventionMixin"]
