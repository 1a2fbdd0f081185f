"""Domain layer — search paths, candidate names, location and loading rules.

This layer depends only on the standard library.
It must never import from services, infrastructure, commands, or config.
"""
