"""
Application layer: services, schemas and ports.
"""
