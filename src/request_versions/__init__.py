"""Version detection, migration and comparison for saved REST requests."""

from .requests import (
    REST_REQ_SCHEMA_VERSION,
    RestRequest,
    detect_request_version,
    ensure_ref_id,
    get_default_rest_request,
    is_equal_rest_request,
    make_rest_request,
    rest_requests,
)

__all__ = [
    "REST_REQ_SCHEMA_VERSION",
    "RestRequest",
    "detect_request_version",
    "ensure_ref_id",
    "get_default_rest_request",
    "is_equal_rest_request",
    "make_rest_request",
    "rest_requests",
]
