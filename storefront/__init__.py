"""
Appliance Storefront.

Category catalog persisted as JSON, typo-tolerant product search, and a
shared-code admin surface, served with FastAPI.
"""

__version__ = "1.0.0"
