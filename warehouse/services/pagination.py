from typing import Optional

from warehouse.config import get_settings


def normalize_page(limit: Optional[int], offset: Optional[int]) -> tuple[int, int]:
    settings = get_settings()
    if limit is None or limit <= 0:
        limit = settings.PAGE_DEFAULT_LIMIT
    limit = min(limit, settings.PAGE_MAX_LIMIT)
    if offset is None or offset < 0:
        offset = 0
    return limit, offset
