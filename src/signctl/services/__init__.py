"""Service layer — signing and randomness operations returning ServiceResult.

Services may import from domain, infrastructure, and config.
They must never import from commands or output.
"""
