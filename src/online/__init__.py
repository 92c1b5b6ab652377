"""Online media catalog tools for Word of Life Ministries."""

__version__ = "0.4.0"
