"""Result Mapping — turns handler Results into HTTP responses at the route edge.

Invariants:
    - Success → the value (routes declare response_model / status_code)
    - Failure → RequestRejectedError with the Result's code; the global handler renders it
"""

from seepaw.core.errors import RequestRejectedError
from seepaw.core.pagination import PagedList
from seepaw.core.result import Result
from seepaw.schemas.common import PagedResponse


def unwrap(result: Result):
    """Return result.value or raise RequestRejectedError."""
    if not result.is_success:
        raise RequestRejectedError(result.error or "Request rejected", result.code)
    return result.value


def unwrap_page(result: Result) -> PagedResponse:
    paged: PagedList = unwrap(result)
    return PagedResponse.from_paged(paged)
