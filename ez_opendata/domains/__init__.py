"""Domain layer: geographic scoping types and pure POI transformations.

Nothing here performs IO.
"""
