"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class DataSourceError(DomainException):
    """Upstream data source failed (transport, auth or schema error)"""

    pass


class SimulationTriggerError(DomainException):
    """External simulation runner rejected or never received the trigger"""

    pass
