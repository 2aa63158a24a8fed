"""
Infrastructure layer - structured logging, configuration and error handling.
"""
