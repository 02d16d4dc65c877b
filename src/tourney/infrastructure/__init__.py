"""Infrastructure layer — database engine, entities, and repositories.

This layer depends on stdlib and SQLAlchemy. It must never import from
domain, services, commands, or output. The service layer bridges
between DTOs and entities through mappers.
"""
