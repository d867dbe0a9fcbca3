"""
Recommendation engine.

Responsibilities:
- Derive category and city affinities from a user's place statuses.
- Exclude every place the user already annotated.
- Score the rest by affinity plus a small random exposure term.
- Fall back to a shuffled popularity list when the user has no history.
"""
