"""Domain layer for Define Explorer.

This layer contains the parsed Define-XML model and the value-level metadata
logic. It is independent of external frameworks and infrastructure.
"""
