"""Domain layer — DTOs and the mapper/validator contracts.

This layer depends only on stdlib and pydantic. It must never import
from infrastructure, services, commands, or output.
"""
