"""Service layer — the layout environment and CLI-facing operations.

Services may import from domain, config, plugins, and infrastructure layers.
They must never import from commands or output.
"""
