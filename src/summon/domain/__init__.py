"""Domain layer — type keys, rules, authoring sugar, and errors.

This layer depends only on the stdlib.
It must never import from engine, services, infrastructure, commands, or config.
"""
