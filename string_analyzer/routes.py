from typing import Optional

from fastapi import APIRouter, Depends, Query, Request, Response

from string_analyzer.limiter import get_rate_limit_decorator
from string_analyzer.schemas import (
    ListResponse,
    NaturalLanguageResponse,
    StringRequest,
    StringResponse,
)
from string_analyzer.services import (
    create_string,
    delete_string_by_value,
    get_all_strings_with_filters,
    get_string_by_value,
    get_strings_by_natural_language,
)
from string_analyzer.store import StringStore

router = APIRouter()


def get_store(request: Request) -> StringStore:
    """The store owned by the running application."""
    return request.app.state.store


@router.get("/health")
@get_rate_limit_decorator()
def health(request: Request) -> dict:
    """Basic health check endpoint."""
    return {"status": "ok"}


@router.post("/strings", response_model=StringResponse, status_code=201)
@get_rate_limit_decorator()
def create_string_endpoint(
    request: Request, payload: StringRequest, store: StringStore = Depends(get_store)
) -> dict:
    """Create and analyze a string."""
    return create_string(payload.value, store)


@router.get("/strings", response_model=ListResponse)
@get_rate_limit_decorator()
def get_all_strings(
    request: Request,
    is_palindrome: Optional[str] = Query(None),
    min_length: Optional[str] = Query(None),
    max_length: Optional[str] = Query(None),
    word_count: Optional[str] = Query(None),
    contains_character: Optional[str] = Query(None),
    store: StringStore = Depends(get_store),
) -> dict:
    """Get all strings with optional filtering."""
    raw_filters = {
        "is_palindrome": is_palindrome,
        "min_length": min_length,
        "max_length": max_length,
        "word_count": word_count,
        "contains_character": contains_character,
    }
    return get_all_strings_with_filters(store, raw_filters)


# Registered before /strings/{string_value} so it is never treated as a lookup
@router.get("/strings/filter-by-natural-language", response_model=NaturalLanguageResponse)
@get_rate_limit_decorator()
def filter_by_natural_language(
    request: Request,
    query: Optional[str] = Query(None),
    store: StringStore = Depends(get_store),
) -> dict:
    """Filter strings using a natural language query."""
    return get_strings_by_natural_language(store, query)


@router.get("/strings/{string_value:path}", response_model=StringResponse)
@get_rate_limit_decorator()
def get_string_endpoint(request: Request, string_value: str, store: StringStore = Depends(get_store)) -> dict:
    """Get a specific string by its raw value."""
    return get_string_by_value(string_value, store)


@router.delete("/strings/{string_value:path}", status_code=204)
@get_rate_limit_decorator()
def delete_string_endpoint(request: Request, string_value: str, store: StringStore = Depends(get_store)) -> Response:
    """Delete a string by its raw value."""
    delete_string_by_value(string_value, store)
    return Response(status_code=204)
