from typing import Optional

MAX_PAGE_SIZE = 100


def check_page(page: int, limit: int) -> Optional[str]:
    if page < 1:
        return "page must be >= 1"
    if limit < 1 or limit > MAX_PAGE_SIZE:
        return f"limit must be between 1 and {MAX_PAGE_SIZE}"
    return None


def page_offset(page: int, limit: int) -> int:
    return (page - 1) * limit
