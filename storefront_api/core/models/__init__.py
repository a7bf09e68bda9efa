"""Pydantic models shared across the Storefront API."""
