"""
config.py - Settings for the popular drug ratings reporter

Every value can be overridden with an environment variable of the same name
(except API_ROOT, which reads RATINGS_API_ROOT).
"""

import os

# Root of the ratings API; drug details live under <API_ROOT>/drugs/<id>
API_ROOT = os.environ.get('RATINGS_API_ROOT', 'https://kusuri-miru-api-4b3a54cvqq-an.a.run.app/')

# How many of the most viewed drugs to report on
MAX_RANK = int(os.environ.get('MAX_RANK', '5'))

# Crontab expression for the report (top of every hour)
REPORT_SCHEDULE = os.environ.get('REPORT_SCHEDULE', '0 */1 * * *')
SCHEDULER_TIMEZONE = os.environ.get('SCHEDULER_TIMEZONE', 'UTC')

# Overlapping ticks are allowed to run side by side
MAX_OVERLAPPING_TICKS = int(os.environ.get('MAX_OVERLAPPING_TICKS', '3'))

# Google Analytics service account key and the view to query
GOOGLE_ANALYTICS_AUTH_JSON = os.environ.get('GOOGLE_ANALYTICS_AUTH_JSON', './google_analytics_auth.json')
GOOGLE_ANALYTICS_VIEW_ID = os.environ.get('GOOGLE_ANALYTICS_VIEW_ID', '228276979')
GOOGLE_ANALYTICS_SCOPES = ['https://www.googleapis.com/auth/analytics.readonly']

# Only page paths containing this marker are drug pages (/medicine/<id>/reviews)
DRUG_PATH_MARKER = os.environ.get('DRUG_PATH_MARKER', 'medicine')

# Rating lookups in flight at once. 1 fetches and prints one drug before
# requesting the next; above 1 fetches in parallel and prints by rank
RATING_CONCURRENCY = int(os.environ.get('RATING_CONCURRENCY', '1'))

# Seconds
REQUEST_TIMEOUT = int(os.environ.get('REQUEST_TIMEOUT', '30'))

HEADERS = {
    'User-Agent': 'PopularDrugRatings/1.0',
}
