"""
Core infrastructure: settings, logging, database sessions and Result.
"""
