# src/twitter_api_core/paginators/accumulator.py
"""
Growing in-memory merge of every page fetched for one paginated query.
"""

from typing import Any, Dict, Generic, List, Mapping, NamedTuple, Optional, TypeVar

TItem = TypeVar('TItem')

NEXT_TOKEN = 'next_token'
PREVIOUS_TOKEN = 'previous_token'
RESULT_COUNT = 'result_count'


class PageView(NamedTuple):
    """Values read from a page before anything is mutated."""
    items: List[Any]
    result_count: int
    next_token: Optional[str]
    previous_token: Optional[str]
    includes: Dict[str, List[Any]]


def read_page(page: Any) -> PageView:
    """
    Extract the structural shape needed for merging.

    Missing ``data``/``includes`` count as empty, a missing ``result_count``
    as 0.

    Raises:
        TypeError: The page is not shaped like ``{data, meta, includes}``
    """
    if not isinstance(page, Mapping):
        raise TypeError(f"Paginated response must be an object, got {type(page).__name__}")

    meta = page.get('meta') or {}
    if not isinstance(meta, Mapping):
        raise TypeError("Paginated response 'meta' must be an object")

    data = page.get('data') or []
    if not isinstance(data, list):
        raise TypeError("Paginated response 'data' must be an array")

    includes = page.get('includes') or {}
    if not isinstance(includes, Mapping):
        raise TypeError("Paginated response 'includes' must be an object")

    return PageView(
        items=list(data),
        result_count=int(meta.get(RESULT_COUNT) or 0),
        next_token=meta.get(NEXT_TOKEN),
        previous_token=meta.get(PREVIOUS_TOKEN),
        includes={category: list(entities or []) for category, entities in includes.items()},
    )


class PaginatedAccumulator(Generic[TItem]):
    """
    Ordered items, running meta and includes for one logical query.

    Items keep fetch order: forward pages are appended, backward pages
    prepended. Includes are concatenated per category and never
    de-duplicated. The accumulator is only ever extended.

    Example:
        >>> acc = PaginatedAccumulator.from_page({"data": [1, 2], "meta": {"result_count": 2, "next_token": "a"}})
        >>> _ = acc.merge({"data": [3], "meta": {"result_count": 1}}, forward=True)
        >>> acc.data, acc.meta
        ([1, 2, 3], {'result_count': 3, 'next_token': None})
    """

    def __init__(
        self,
        data: Optional[List[TItem]] = None,
        meta: Optional[Mapping[str, Any]] = None,
        includes: Optional[Mapping[str, List[Any]]] = None,
    ):
        self.data: List[TItem] = list(data or [])
        self.meta: Dict[str, Any] = dict(meta or {})
        self.meta.setdefault(RESULT_COUNT, 0)
        self.includes: Dict[str, List[Any]] = {
            category: list(entities) for category, entities in (includes or {}).items()
        }

    @classmethod
    def from_page(cls, page: Any) -> 'PaginatedAccumulator[TItem]':
        """Initial state from the first page of a query."""
        view = read_page(page)
        meta = dict(page.get('meta') or {})
        meta[RESULT_COUNT] = view.result_count
        return cls(data=view.items, meta=meta, includes=view.includes)

    @property
    def result_count(self) -> int:
        return self.meta[RESULT_COUNT]

    @property
    def next_token(self) -> Optional[str]:
        return self.meta.get(NEXT_TOKEN)

    @property
    def previous_token(self) -> Optional[str]:
        return self.meta.get(PREVIOUS_TOKEN)

    def merge(self, page: Any, forward: bool = True) -> PageView:
        """
        Fold one page in. All-or-nothing: a malformed page raises before
        any state changes.

        Both directions add the page's ``result_count`` to the running total.
        """
        view = read_page(page)

        self.meta[RESULT_COUNT] += view.result_count
        if forward:
            self.meta[NEXT_TOKEN] = view.next_token
            self.data.extend(view.items)
        else:
            self.meta[PREVIOUS_TOKEN] = view.previous_token
            self.data[:0] = view.items

        for category, entities in view.includes.items():
            self.includes.setdefault(category, []).extend(entities)

        return view

    def __len__(self) -> int:
        return len(self.data)

    def __repr__(self) -> str:
        return (
            f"PaginatedAccumulator(items={len(self.data)}, "
            f"result_count={self.result_count}, "
            f"next_token={self.next_token!r}, previous_token={self.previous_token!r})"
        )
