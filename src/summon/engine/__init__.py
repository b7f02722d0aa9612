"""Engine layer — registry, plan search, value store, and executor.

The engine depends only on the domain layer. It performs no I/O.
"""
