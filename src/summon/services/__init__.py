"""Service layer — operations over a Tome returning ServiceResult.

Services may import from domain, engine, and infrastructure layers.
They must never import from commands or output.
"""
