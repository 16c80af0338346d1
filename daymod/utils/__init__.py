"""Utility functions for parsing and sampling the days of activities."""
