"""
Catalog ingestion package.

Responsibilities:
- Read already-fetched source documents (``{title, places}`` JSON) from disk.
- Merge them into one canonical catalog through the merge engine.
- Fill placeholder categories, normalise divisions, report data quality.
- Persist the catalog locally for the API.
"""
