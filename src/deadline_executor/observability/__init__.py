"""
observability/ — Structured Logging
"""
