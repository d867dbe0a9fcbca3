"""
Merge engine for multi-source place catalogs.

Responsibilities:
- Deduplicate places by place id (or name) and by rounded coordinates.
- Aggregate the titles of every source a place was seen in.
- Resolve field conflicts with a last-write-wins overlay.
"""
