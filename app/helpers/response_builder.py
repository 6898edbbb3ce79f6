import math
from typing import Any, Dict, List, Optional, Sequence

from app.schemas.common_schema import EntityModel
from app.utils.validation_utils import parse_page_param

DEFAULT_PAGE = 1
DEFAULT_PAGE_SIZE = 20


def _slice_bound(bound: float, length: int) -> int:
    # Infinite bounds (huge page/pageSize products) clamp to the ends of the list
    if math.isinf(bound):
        return length if bound > 0 else 0
    return math.trunc(bound)


def paginate(items: Sequence[Any], page: float, page_size: float) -> List[Any]:
    """Return the [(page-1)*page_size, page*page_size) window of items.

    Fractional bounds are truncated toward zero.
    """
    start = (page - 1) * page_size
    end = start + page_size
    return list(items[_slice_bound(start, len(items)):_slice_bound(end, len(items))])


def build_list_response(entities: Sequence[EntityModel], total: Optional[int] = None) -> Dict[str, Any]:
    return {
        "data": [e.to_response() for e in entities],
        "total": len(entities) if total is None else total,
    }


def build_page_response(entities: Sequence[EntityModel], page: Optional[str], page_size: Optional[str]) -> Dict[str, Any]:
    """Paginate an already-filtered collection; total counts the whole collection."""
    safe_page = parse_page_param(page, DEFAULT_PAGE)
    safe_page_size = parse_page_param(page_size, DEFAULT_PAGE_SIZE)
    window = paginate(entities, safe_page, safe_page_size)
    return build_list_response(window, total=len(entities))
