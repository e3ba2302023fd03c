"""Domain layer — type nodes, functions, the model aggregate, and errors.

This layer depends only on stdlib.
It must never import from assembly, services, commands, or config.
"""
