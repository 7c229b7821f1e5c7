"""Field-level validation errors shared by every write model."""

from collections import defaultdict


class ValidationError(Exception):
    """Raised when a record fails validation and nothing was persisted.

    ``errors`` maps a field name (``base`` for record-level problems) to the
    list of messages for that field.
    """

    def __init__(self, errors: dict[str, list[str]]) -> None:
        self.errors = {field: list(messages) for field, messages in errors.items()}
        super().__init__(self.full_messages())

    def full_messages(self) -> str:
        return "; ".join(
            f"{field} {message}" if field != "base" else message
            for field, messages in self.errors.items()
            for message in messages
        )


class Errors:
    """Collects validation messages per field before raising."""

    def __init__(self) -> None:
        self._errors: dict[str, list[str]] = defaultdict(list)

    def add(self, field: str, message: str) -> None:
        self._errors[field].append(message)

    def __bool__(self) -> bool:
        return bool(self._errors)

    def raise_if_any(self) -> None:
        if self._errors:
            raise ValidationError(dict(self._errors))
