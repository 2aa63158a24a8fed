"""
Application layer - passing routines and the demonstration runner.
"""
