"""Operational tools for the Storefront API."""
