"""Configuration, date parsing, output and prompt helpers for a Harvest time-tracking CLI."""

__version__ = "0.1.0"