"""PriceMix - cached daily price series and weighted ticker mixes."""

__version__ = "0.1.0"
