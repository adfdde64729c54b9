"""Domain layer — bindings, type keys, decoders, and errors.

This layer depends only on the stdlib.
It must never import from infrastructure, services, commands, or config.
"""
