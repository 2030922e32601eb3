"""PostFinder - index, filter and summarise MDX posts."""

__version__ = "0.1.0"
