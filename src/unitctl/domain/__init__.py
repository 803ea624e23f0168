"""Domain layer — unit catalog, validation rules, and conversion math.

This layer depends only on stdlib.
It must never import from services, commands, output, or config.
"""
