"""
Shared helpers: logging setup and configuration loading.
"""
