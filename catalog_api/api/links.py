"""
Hypermedia helpers: absolute resource links, pagination links and the
paginated envelope, plus cacheable JSON responses.
"""
from typing import Any, Dict, List, Optional
from urllib.parse import urlencode

from fastapi import Request
from fastapi.responses import JSONResponse

from catalog_api.repositories.base import Page
from catalog_api.schemas.common import Envelope, PageMeta


def base_url(request: Request) -> str:
    """``scheme://host[:port]`` plus any mount prefix, without trailing slash."""
    return str(request.base_url).rstrip("/")


def resource_url(request: Request, path: str) -> str:
    return f"{base_url(request)}{path}"


def page_url(request: Request, page: int, limit: int, filters: Dict[str, Optional[str]]) -> str:
    query: Dict[str, Any] = {"page": page, "limit": limit}
    query.update({key: value for key, value in filters.items() if value})
    return f"{base_url(request)}{request.url.path}?{urlencode(query)}"


def pagination_links(request: Request, page: Page, filters: Dict[str, Optional[str]]) -> Dict[str, str]:
    """
    Build self/first/last links, plus prev and next when they exist.

    ``last`` never points below page 1, even for an empty result set.
    """
    last_page = max(page.total_pages, 1)
    links = {
        "self": page_url(request, page.page, page.limit, filters),
        "first": page_url(request, 1, page.limit, filters),
        "last": page_url(request, last_page, page.limit, filters),
    }
    if page.has_prev:
        links["prev"] = page_url(request, page.page - 1, page.limit, filters)
    if page.has_next:
        links["next"] = page_url(request, page.page + 1, page.limit, filters)
    return links


def envelope(
    request: Request,
    page: Page,
    data: List[Dict[str, Any]],
    filters: Dict[str, Optional[str]],
) -> Dict[str, Any]:
    meta = PageMeta(
        current_page=page.page,
        total_pages=page.total_pages,
        total_items=page.total,
        items_per_page=page.limit,
    )
    return Envelope(data=data, meta=meta, links=pagination_links(request, page, filters)).to_response()


def cached_json(content: Any, max_age: int, status_code: int = 200, private: bool = False) -> JSONResponse:
    """
    JSON response that caches may keep for ``max_age`` seconds.

    Every route behind a bearer token varies by ``Authorization``.
    ``private`` keeps tenant-scoped responses out of shared caches.
    """
    scope = "private" if private else "public"
    return JSONResponse(
        content=content,
        status_code=status_code,
        headers={"Cache-Control": f"{scope}, max-age={max_age}", "Vary": "Authorization"},
    )
