"""
HTTP layer: the aggregated router, request dependencies and one
endpoint module per entity.
"""
