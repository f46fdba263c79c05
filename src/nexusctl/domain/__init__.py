"""Domain layer — ledger types, type signatures, and response records.

This layer depends only on stdlib and pydantic.
It must never import from services, infrastructure, commands, or config.
"""
