"""Infrastructure layer — environment and secret-file access.

It must never import from services, commands, or output.
"""
