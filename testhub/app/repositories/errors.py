from typing import Iterable, Tuple


class DuplicateKeyError(Exception):
    """
    Raised by repositories when a write violates a unique constraint.

    ``fields`` names the offending columns as far as the database reports
    them; it is empty when the driver message could not be attributed.
    """

    def __init__(self, entity: str, fields: Iterable[str] = ()):
        self.entity = entity
        self.fields: Tuple[str, ...] = tuple(fields)
        super().__init__(
            f"Duplicate {entity} on {', '.join(self.fields) or 'unknown field'}"
        )

    def involves(self, field: str) -> bool:
        return field in self.fields
