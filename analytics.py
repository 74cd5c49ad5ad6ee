"""
analytics.py - Find the most viewed drug pages in Google Analytics

Uses the Reporting API v4 (reports:batchGet) with a service account key that
has the read-only analytics scope. Drug pages look like
/medicine/<drug id>/reviews; the drug id is the third path segment.
"""

from dataclasses import dataclass
from typing import Optional

import requests
from google.auth.transport.requests import AuthorizedSession
from google.oauth2 import service_account

from config import (
    DRUG_PATH_MARKER,
    GOOGLE_ANALYTICS_AUTH_JSON,
    GOOGLE_ANALYTICS_SCOPES,
    GOOGLE_ANALYTICS_VIEW_ID,
    REQUEST_TIMEOUT,
)
from console import log

API_URL = "https://analyticsreporting.googleapis.com/v4/reports:batchGet"


class MalformedPathError(ValueError):
    """A page path did not have the /<kind>/<id>/<subresource> shape."""


@dataclass(frozen=True)
class ParsedPath:
    path: str
    item_id: Optional[str] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def parse_item_id(path: str) -> ParsedPath:
    """
    Extract the item id from a page path like /medicine/<id>/reviews.

    Returns a failed ParsedPath (error set, item_id None) when the path has
    fewer than three segments or the id segment is empty.
    """
    segments = path.split('/')
    if len(segments) < 3:
        return ParsedPath(path, error=f"no item id segment in {path!r}")

    item_id = segments[2]
    if not item_id:
        return ParsedPath(path, error=f"empty item id in {path!r}")

    return ParsedPath(path, item_id=item_id)


def build_report_request(limit: int, view_id: str = GOOGLE_ANALYTICS_VIEW_ID,
                         path_marker: str = DRUG_PATH_MARKER) -> dict:
    """
    Build the batchGet body: pageviews per page over the last 7 days,
    drug pages only, most viewed first, at most `limit` rows.
    """
    return {
        'reportRequests': [
            {
                'viewId': view_id,
                'dateRanges': [{'startDate': '7daysAgo', 'endDate': 'today'}],
                'metrics': [{'expression': 'ga:pageviews'}],
                'dimensions': [{'name': 'ga:pagePath'}, {'name': 'ga:pageTitle'}],
                'dimensionFilterClauses': [
                    {
                        'operator': 'AND',
                        'filters': [
                            {
                                'dimensionName': 'ga:pagePath',
                                'operator': 'PARTIAL',
                                'expressions': [path_marker],
                            },
                        ],
                    }
                ],
                'orderBys': [{'fieldName': 'ga:pageviews', 'sortOrder': 'DESCENDING'}],
                'pageSize': limit,
            }
        ]
    }


def get_session(key_file: str = GOOGLE_ANALYTICS_AUTH_JSON) -> requests.Session:
    """Get a requests session authorized with the analytics service account."""
    credentials = service_account.Credentials.from_service_account_file(
        key_file, scopes=GOOGLE_ANALYTICS_SCOPES,
    )
    return AuthorizedSession(credentials)


def fetch_report_rows(limit: int, session: requests.Session = None,
                      view_id: str = GOOGLE_ANALYTICS_VIEW_ID,
                      path_marker: str = DRUG_PATH_MARKER) -> list[dict]:
    """
    Fetch the ranked report rows, each {'dimensions': [path, title], 'metrics': [...]}.

    Errors from the provider are not caught.
    """
    session = session or get_session()
    body = build_report_request(limit, view_id=view_id, path_marker=path_marker)

    response = session.post(API_URL, json=body, timeout=REQUEST_TIMEOUT)
    response.raise_for_status()
    data = response.json()

    reports = data.get('reports', [])
    if not reports:
        return []
    # The API leaves out 'rows' entirely when nothing matched
    return reports[0].get('data', {}).get('rows', [])


def fetch_top_item_ids(limit: int, session: requests.Session = None,
                       view_id: str = GOOGLE_ANALYTICS_VIEW_ID,
                       path_marker: str = DRUG_PATH_MARKER,
                       strict: bool = True) -> list[str]:
    """
    Get the ids of the `limit` most viewed drug pages, most viewed first.

    A row whose path has no usable id raises MalformedPathError, failing the
    whole report. With strict=False such rows are skipped with a warning.
    """
    if not isinstance(limit, int) or isinstance(limit, bool) or limit < 1:
        raise ValueError(f"limit must be a positive integer, got {limit!r}")

    rows = fetch_report_rows(limit, session=session, view_id=view_id, path_marker=path_marker)

    item_ids = []
    for row in rows[:limit]:
        parsed = parse_item_id(row['dimensions'][0])
        if not parsed.ok:
            if strict:
                raise MalformedPathError(parsed.error)
            log(f"Skipping page: {parsed.error}", "WARNING")
            continue
        item_ids.append(parsed.item_id)

    return item_ids
