"""Multi-tenant product catalog and customer directory API."""

__version__ = "1.0.0"
