from dataclasses import dataclass


@dataclass(frozen=True)
class NotFound:
    """Result variant for a root course or module that does not exist."""

    kind: str  # course/module
    code: str

    @property
    def message(self) -> str:
        return f"{self.kind.capitalize()} '{self.code}' not found."


class StoreError(Exception):
    """The record store failed; never a data-quality gap."""


class StoreUnavailable(StoreError):
    pass


class MalformedRecord(StoreError):
    def __init__(self, kind: str, code: str | None, reason: str):
        self.kind = kind
        self.code = code
        self.reason = reason
        super().__init__(f"Malformed {kind} record {code!r}: {reason}")
