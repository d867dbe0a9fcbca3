"""
Per-user place statuses (want, visited, like, dislike).

The ranking engine only reads status maps; this package validates, updates
and migrates them for the API layer.
"""
