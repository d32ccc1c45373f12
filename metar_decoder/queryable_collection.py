"""
Chainable in-memory collection used for querying decoded reports.
"""

from typing import TypeVar, Generic, Callable, List, Dict, Optional, Any, Iterable

T = TypeVar('T')


class QueryableCollection(Generic[T]):
    """
    Lightweight chainable wrapper around a list.

    Every filtering method returns a new collection of the same class, so
    subclasses can add domain filters and keep chaining.

    Examples:
        collection.filter(lambda r: r.wind.speed_knots > 10).first()
        collection.where(station='KJFK').count()
        collection.order_by(lambda r: r.station).take(5).all()
    """

    def __init__(self, items: Iterable[T]):
        self._items: List[T] = items if isinstance(items, list) else list(items)

    def _new_collection(self, items: List[T]) -> 'QueryableCollection[T]':
        return self.__class__(items)

    def filter(self, predicate: Callable[[T], bool]) -> 'QueryableCollection[T]':
        """Keep items for which predicate returns True."""
        return self._new_collection([item for item in self._items if predicate(item)])

    def where(self, **kwargs) -> 'QueryableCollection[T]':
        """Keep items whose attributes equal all the given values."""
        def matches(item: T) -> bool:
            return all(getattr(item, key, None) == value for key, value in kwargs.items())
        return self.filter(matches)

    def first(self) -> Optional[T]:
        return self._items[0] if self._items else None

    def last(self) -> Optional[T]:
        return self._items[-1] if self._items else None

    def all(self) -> List[T]:
        return self._items

    def count(self) -> int:
        return len(self._items)

    def exists(self) -> bool:
        return len(self._items) > 0

    def group_by(self, key_func: Callable[[T], Any]) -> Dict[Any, List[T]]:
        """
        Group items by a key function.

        Examples:
            by_station = reports.group_by(lambda r: r.station)
        """
        result: Dict[Any, List[T]] = {}
        for item in self._items:
            result.setdefault(key_func(item), []).append(item)
        return result

    def order_by(self, key_func: Callable[[T], Any], reverse: bool = False) -> 'QueryableCollection[T]':
        return self._new_collection(sorted(self._items, key=key_func, reverse=reverse))

    def take(self, n: int) -> 'QueryableCollection[T]':
        return self._new_collection(self._items[:n])

    def skip(self, n: int) -> 'QueryableCollection[T]':
        return self._new_collection(self._items[n:])

    def __iter__(self):
        return iter(self._items)

    def __len__(self):
        return len(self._items)

    def __getitem__(self, index):
        if isinstance(index, slice):
            return self._new_collection(self._items[index])
        return self._items[index]

    def __bool__(self):
        return len(self._items) > 0

    def __repr__(self):
        return f"{self.__class__.__name__}(count={len(self._items)})"
