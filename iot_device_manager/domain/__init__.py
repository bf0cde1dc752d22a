"""
Domain layer: entities and value types with no infrastructure dependencies.
"""
