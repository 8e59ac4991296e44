"""Primitive: prevent deletion of ledger entities.

Ledger entries are append-only. Any attempt to delete an entity using
this mixin raises ImmutableEntryError before any storage interaction.

Usage:
    @dataclass(frozen=True)
    class RecognitionEntry(DeletePreventionMixin):
        ...

    entry.delete()  # Raises ImmutableEntryError
"""

from src.domain.errors.recognition import ImmutableEntryError


class DeletePreventionMixin:
    """Mixin that prevents deletion of domain entities.

    It provides a `delete()` method that always raises an error, making
    the forbidden operation visible rather than silent.

    Example:
        >>> class Entry(DeletePreventionMixin):
        ...     pass
        >>> Entry().delete()  # doctest: +IGNORE_EXCEPTION_DETAIL
        Traceback (most recent call last):
            ...
        ImmutableEntryError: Deletion prohibited...
    """

    def delete(self) -> None:
        """Raise ImmutableEntryError - deletion is prohibited.

        Raises:
            ImmutableEntryError: Always.
        """
        raise ImmutableEntryError(
            "Deletion prohibited - recognition ledger entries are append-only"
        )
