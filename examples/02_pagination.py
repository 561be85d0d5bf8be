"""
Cursor Pagination Examples

Follows next_token / previous_token through user timelines.
"""

import asyncio
import os

from twitter_api_core import (
    ApiClient,
    AsyncApiClient,
    AsyncPaginator,
    Paginator,
    user_followers,
    user_following,
)

HEADERS = {"Authorization": f"Bearer {os.environ.get('TWITTER_BEARER_TOKEN', '')}"}
USER_ID = "2244994945"


def all_followers():
    """Fetch every follower page."""
    print("\n=== Followers ===")

    with ApiClient(headers=HEADERS) as client:
        paginator = Paginator.create(client, user_followers(USER_ID), {"max_results": 1000})
        paginator.fetch_last()

    print(f"Users: {len(paginator.users)}, result_count: {paginator.meta['result_count']}")
    print(f"Rate limit after last page: {paginator.rate_limit}")


async def first_following(count: int = 300):
    """Async paginator, stop after ``count`` users."""
    print("\n=== Following (async) ===")

    async with AsyncApiClient(headers=HEADERS) as client:
        paginator = AsyncPaginator(client, user_following(USER_ID))
        await paginator.fetch_last(count, max_results=100)

    print(f"Users: {len(paginator)}, done: {paginator.done}")


if __name__ == "__main__":
    all_followers()
    asyncio.run(first_following())
