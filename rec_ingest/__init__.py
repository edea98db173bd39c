"""
Top-level package for the recommendation ingestion pipeline.

This package fetches the collaborative and content-based recommendation
exports, parses them into rows, normalizes each row into a scored
recommendation list and merges the content ids of both sources into one
registry.  When either export cannot be ingested the whole run falls
back to a small synthetic catalogue.  There are no side-effects on
import; the API and CLI modules start ingestion explicitly.
"""
