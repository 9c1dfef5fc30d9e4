"""
Domain layer.

The domain layer contains the card model and the scheduling rules.
It has no dependencies on storage, configuration or presentation.

This layer contains:
- Entities: Objects with identity and lifecycle
- Value Objects: Immutable objects defined by attributes
- Domain Services: Stateless operations across entities
"""
