"""Exception types raised by the data-access layer."""


class AnsiversaDbError(Exception):
    """Base class for every error raised by this package."""


class ConfigurationError(AnsiversaDbError):
    """Tenant configuration is missing or incomplete."""


class MutationIntegrityError(AnsiversaDbError):
    """An INSERT/UPDATE ... RETURNING statement came back without a row."""

    def __init__(self, entity: str, action: str = "insert"):
        self.entity = entity
        self.action = action
        super().__init__(f"Failed to {action} {entity}: statement returned no row")


class UnknownOperationError(AnsiversaDbError, KeyError):
    """A mutation was requested for a table/operation absent from the registry."""

    def __init__(self, table: str, operation: str):
        self.table = table
        self.operation = operation
        super().__init__(f"No '{operation}' operation registered for table '{table}'")

    def __str__(self) -> str:
        return self.args[0]
