"""Storefront client: catalog reads, an in-memory cart and order checkout."""

__version__ = "1.0.0"
