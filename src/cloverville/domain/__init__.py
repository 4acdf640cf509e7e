"""Domain layer — the village record and its entries.

This layer depends only on stdlib and pydantic.
It must never import from services, infrastructure, commands, or config.
"""
