"""
Listing cache with versioned keys.

List endpoints cache their serialized payload under a key that embeds a
per-listing version counter. Invalidation bumps the counter, so every
previously cached page becomes unreachable and simply expires.
"""

import hashlib
import json
import logging

from django.conf import settings
from django.core.cache import cache


logger = logging.getLogger(__name__)

PURCHASES_LISTING = 'purchases'
BENEFICIARIES_LISTING = 'beneficiaries'


def _version_key(listing):
    return f'listing-version:{listing}'


def get_listing_version(listing):
    """Current version counter of a listing (starts at 1)."""
    return cache.get_or_set(_version_key(listing), 1, timeout=None)


def listing_cache_key(listing, **params):
    """Build the cache key for one listing query."""
    digest = hashlib.sha1(
        json.dumps(params, sort_keys=True, default=str).encode('utf-8')
    ).hexdigest()
    return f'listing:{listing}:v{get_listing_version(listing)}:{digest}'


def get_cached_listing(listing, **params):
    return cache.get(listing_cache_key(listing, **params))


def set_cached_listing(data, listing, **params):
    timeout = getattr(settings, 'LISTING_CACHE_TIMEOUT', 300)
    cache.set(listing_cache_key(listing, **params), data, timeout=timeout)


def invalidate_listings(*listings):
    """
    Bump the version of each listing.

    Fire and forget: a cache failure is logged and never reaches the caller.
    """
    for listing in listings:
        try:
            cache.incr(_version_key(listing))
        except ValueError:
            # Counter missing or evicted
            cache.set(_version_key(listing), 2, timeout=None)
        except Exception as e:
            logger.warning(
                "listing_invalidation_failed",
                extra={'listing': listing, 'error': str(e)},
            )
