"""
Observability package - tracing and request logging.
"""
