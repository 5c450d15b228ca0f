"""Domain layer: entities, enums, errors, and ports (protocols).

Pure business types with no provider or framework dependencies.
"""
