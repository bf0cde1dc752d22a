"""
Infrastructure layer: storage implementations.
"""
