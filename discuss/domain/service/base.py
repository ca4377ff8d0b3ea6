"""Base service class for domain services."""


class Service:
    """Base class for all domain services.

    Domain services hold the comment and vote rules that span the
    comment store and the vote ledger.
    """

    pass
