"""
FastAPI server for the Storefront API.

Run it with ``python -m storefront_api.server``.
"""
