"""Order tracking service for a small beverage distributor."""

__version__ = "1.0.0"
