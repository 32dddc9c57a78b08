"""Consensus block types, histograms, log analysis and testbed fault scheduling."""

__version__ = "0.1.0"