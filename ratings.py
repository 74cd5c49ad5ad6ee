"""
ratings.py - Fetch drug rating aggregates from the ratings API

Only the aggregate fields are requested (include_reviews=false); review bodies
are never downloaded.
"""

from dataclasses import dataclass

import aiohttp
import requests

from config import API_ROOT, HEADERS, REQUEST_TIMEOUT


class RatingsAPIError(Exception):
    """Ratings API answered, but without the fields a rating needs."""


@dataclass(frozen=True)
class RatingRecord:
    name: str
    rating_count: int
    average_rating: float


def drug_url(item_id: str, api_root: str = API_ROOT) -> str:
    """Build the ratings API URL for a drug."""
    return f"{api_root.rstrip('/')}/drugs/{item_id}"


def rating_from_json(data: dict) -> RatingRecord:
    """
    Map a ratings API drug body to a RatingRecord.

    Values are taken as-is: a count or average outside the usual range is not
    clamped.
    """
    try:
        return RatingRecord(
            name=data['name'],
            rating_count=data['count_ratings'],
            average_rating=data['avg_rating'],
        )
    except (KeyError, TypeError) as e:
        raise RatingsAPIError(f"Unexpected drug payload, missing {e}") from e


def fetch_rating(item_id: str, api_root: str = API_ROOT) -> RatingRecord:
    """
    Fetch the rating aggregate for one drug.

    Raises requests.RequestException for transport errors and non-2xx
    responses. There is no retry.
    """
    response = requests.get(
        drug_url(item_id, api_root),
        params={'include_reviews': 'false'},
        headers=HEADERS,
        timeout=REQUEST_TIMEOUT,
    )
    response.raise_for_status()
    return rating_from_json(response.json())


async def fetch_rating_async(session: aiohttp.ClientSession, item_id: str,
                             api_root: str = API_ROOT) -> RatingRecord:
    """Fetch the rating aggregate for one drug on an open aiohttp session."""
    async with session.get(drug_url(item_id, api_root),
                           params={'include_reviews': 'false'},
                           headers=HEADERS) as response:
        response.raise_for_status()
        data = await response.json()
    return rating_from_json(data)
