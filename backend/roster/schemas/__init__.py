# Schemas package init
"""Pydantic request/response models (the JSON wire contract)."""
