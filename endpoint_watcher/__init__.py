"""
Endpoint Watcher - Change detector for JSON APIs and HTML pages.

Fetches one endpoint, extracts a set of values selected by a path
expression, diffs it against the previous run and reports the changes.
"""

__version__ = "0.1.0"
