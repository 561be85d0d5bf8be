# src/twitter_api_core/paginators/endpoints.py
"""User timeline endpoints paged by ``pagination_token``."""

from .paginator import PaginatorEndpoint

USER_BLOCKING = "users/:id/blocking"
USER_FOLLOWERS = "users/:id/followers"
USER_FOLLOWING = "users/:id/following"


def user_blocking(user_id: str) -> PaginatorEndpoint:
    """Users blocked by ``user_id``."""
    return PaginatorEndpoint(USER_BLOCKING, {"id": user_id})


def user_followers(user_id: str) -> PaginatorEndpoint:
    return PaginatorEndpoint(USER_FOLLOWERS, {"id": user_id})


def user_following(user_id: str) -> PaginatorEndpoint:
    return PaginatorEndpoint(USER_FOLLOWING, {"id": user_id})
