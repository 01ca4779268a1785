"""
Infrastructure services.
"""
