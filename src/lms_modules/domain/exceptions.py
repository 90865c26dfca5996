"""Domain exceptions for module group and module operations."""


class LmsModulesError(Exception):
    """Base class for lms-modules domain errors."""


class EntityNotFoundError(LmsModulesError):
    """Raised when a referenced entity does not exist."""

    def __init__(self, entity: str, entity_id: int | str) -> None:
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity} '{entity_id}' not found")


class ImmutableFieldError(LmsModulesError):
    """Raised when an update targets a field that is fixed after insert."""

    def __init__(self, entity: str, field: str) -> None:
        self.entity = entity
        self.field = field
        super().__init__(f"{entity}.{field} cannot be changed after creation")
