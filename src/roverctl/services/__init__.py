"""Service layer — the rover runner and its ServiceResult contract.

Services may import from the domain layer.
They must never import from commands or output.
"""
