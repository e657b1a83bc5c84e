"""Containers keyed by Digest.

@public

Digest.__hash__ reads the payload directly instead of re-hashing it, so these
containers only add key validation on top of the builtin dict and set.
"""

from collections.abc import Iterable, Mapping
from typing import Any, Generic, TypeVar

from typing_extensions import Self

from content_assets.digests.digest import Digest

_T = TypeVar("_T")


def _check_key(key: Any) -> Digest:
    if not isinstance(key, Digest):
        raise TypeError(f"keys must be Digest instances, got {type(key).__name__}")
    return key


class ContentMap(dict[Digest, _T], Generic[_T]):
    """A dict whose keys are Digests.

    @public

    Example:
        >>> sizes: ContentMap[int] = ContentMap()
        >>> sizes[store.put(b"hello")] = 5
    """

    def __init__(self, items: Mapping[Digest, _T] | Iterable[tuple[Digest, _T]] = (), /, **kwargs: Any) -> None:
        if kwargs:
            raise TypeError("ContentMap keys must be Digest instances, not keyword names")
        super().__init__()
        self.update(items)

    def __setitem__(self, key: Digest, value: _T) -> None:
        super().__setitem__(_check_key(key), value)

    def setdefault(self, key: Digest, default: _T = None) -> _T:  # type: ignore[assignment]
        return super().setdefault(_check_key(key), default)

    def update(self, items: Mapping[Digest, _T] | Iterable[tuple[Digest, _T]] = (), /, **kwargs: Any) -> None:  # type: ignore[override]
        """Insert every pair, validating each key."""
        if kwargs:
            raise TypeError("ContentMap keys must be Digest instances, not keyword names")
        pairs = items.items() if isinstance(items, Mapping) else items
        for key, value in pairs:
            self[key] = value

    def __ior__(self, other: Any) -> Self:  # type: ignore[override]
        self.update(other)
        return self

    def copy(self) -> "ContentMap[_T]":
        return ContentMap(self)


class ContentSet(set[Digest]):
    """A set of Digests.

    @public

    Example:
        >>> seen = ContentSet(store.list())
        >>> digest in seen
        True
    """

    def __init__(self, items: Iterable[Digest] = (), /) -> None:
        super().__init__()
        self.update(items)

    def add(self, item: Digest) -> None:
        super().add(_check_key(item))

    def update(self, *others: Iterable[Digest]) -> None:
        """Add every member of every iterable, validating each."""
        for other in others:
            for item in other:
                self.add(item)

    def __ior__(self, other: Any) -> Self:  # type: ignore[override]
        self.update(other)
        return self

    def copy(self) -> "ContentSet":
        return ContentSet(self)
