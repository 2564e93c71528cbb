"""Trade analytics for on-chain bonding-curve markets."""

__version__ = "0.1.0"
