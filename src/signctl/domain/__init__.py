"""Domain layer — signing primitives, wire format, and error taxonomy.

This layer depends only on stdlib.
It must never import from services, infrastructure, commands, or config.
"""
