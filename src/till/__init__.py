"""till: point-of-sale pricing with "X for the price of Y" offers."""

__version__ = "0.1.0"
