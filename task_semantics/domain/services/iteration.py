"""
Iteration patterns over ordered task collections.
"""

from typing import Iterator, List, Optional, Sequence, Tuple, TypeVar

from task_semantics.domain.exceptions import CollectionModifiedError, ValidationError

T = TypeVar('T')


def indexed_iteration(
    items: Sequence[T],
    start: Optional[int] = None,
    stop: Optional[int] = None,
    step: int = 1
) -> Iterator[Tuple[int, T]]:
    """Visit items by position, yielding ``(index, item)``.

    ``start``, ``stop`` and ``step`` follow slice semantics, so a negative
    step walks the collection backwards from the last index. Callers end the
    traversal early by breaking out of the loop.
    """
    if not isinstance(step, int) or step == 0:
        raise ValidationError("Step must be a non-zero integer", field='step', value=step)

    for index in range(len(items))[start:stop:step]:
        yield index, items[index]


def sequential_iteration(items: Sequence[T]) -> Iterator[T]:
    """Visit items in their existing order without exposing positions.

    Adding or removing items while the traversal is in progress raises
    ``CollectionModifiedError``.
    """
    expected_length = len(items)

    for item in items:
        _ensure_unchanged(items, expected_length)
        yield item

    _ensure_unchanged(items, expected_length)


def _ensure_unchanged(items: Sequence[T], expected_length: int) -> None:
    if len(items) != expected_length:
        raise CollectionModifiedError(
            "Collection was modified during iteration",
            expected_length=expected_length,
            actual_length=len(items)
        )


def indexed_visit_order(items: Sequence[T], **kwargs) -> List[T]:
    return [item for _, item in indexed_iteration(items, **kwargs)]


def sequential_visit_order(items: Sequence[T]) -> List[T]:
    return list(sequential_iteration(items))


def visit_orders_match(items: Sequence[T]) -> bool:
    """Check that both patterns visit the same items in the same order."""
    indexed = indexed_visit_order(items)
    sequential = sequential_visit_order(items)
    return len(indexed) == len(sequential) and all(
        a is b for a, b in zip(indexed, sequential)
    )
