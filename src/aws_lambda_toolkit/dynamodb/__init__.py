"""DynamoDB helpers.

Batched writes with retry of unprocessed items, paginated query/scan reads
and record (un)marshalling.
"""
