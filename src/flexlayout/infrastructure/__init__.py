"""Infrastructure layer — Jinja2 rendering of located templates.

This layer depends on stdlib and third-party libs (Jinja2).
It must never import from services, commands, or output.
"""
