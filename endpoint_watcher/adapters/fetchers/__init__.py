"""
Fetchers module - Fetcher port implementations.
"""

from endpoint_watcher.adapters.fetchers.requests_fetcher import AdapterRequestsFetcher

__all__ = ["AdapterRequestsFetcher"]
