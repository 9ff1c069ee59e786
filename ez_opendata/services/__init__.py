"""Application services layer.

Services coordinate work across domains and infrastructure. They hold no
provider-specific logic of their own.
"""
