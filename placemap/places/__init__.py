"""
Place records shared by every stage of the pipeline.

Responsibilities:
- Define the Place schema as it appears in source documents.
- Parse coordinates and visitor lists consistently for merge and ranking.
"""
