"""Base service class for domain services."""


class Service:
    """Base class for all domain services.

    Services hold repositories and collaborators, never per-principal state:
    the acting principal is passed to every operation.
    """

    pass
