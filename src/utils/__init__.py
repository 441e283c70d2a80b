"""
Utility package for the Power Price Check service.
Contains time helpers for hour truncation and formatting.
"""
