"""
Core package - Shared utilities used across services and routes.
"""
