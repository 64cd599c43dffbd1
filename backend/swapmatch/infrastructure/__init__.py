"""Infrastructure Layer: collaborator implementations and cross-cutting concerns.

Invariants:
    - Collaborators satisfy the Protocols in core/repository_protocols structurally
    - Logging setup lives here, never in core/
"""
