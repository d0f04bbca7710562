class LedgerError(Exception):
    """Base class for every error the ledger raises to its callers."""

    status_code = 400

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict:
        return {"error": type(self).__name__, "detail": self.message}


class ValidationError(LedgerError):
    """A draft, patch or payment is invalid. Raised before anything is written."""

    status_code = 400

    def __init__(self, errors: list[str] | str) -> None:
        if isinstance(errors, str):
            errors = [errors]
        self.errors = list(errors)
        super().__init__(" ".join(self.errors))

    def to_dict(self) -> dict:
        return {"error": type(self).__name__, "detail": self.errors}


class IllegalTransitionError(LedgerError):
    status_code = 409

    def __init__(self, current: str, target: str, message: str | None = None) -> None:
        self.current = current
        self.target = target
        super().__init__(message or f"Illegal status transition: {current} -> {target}.")

    def to_dict(self) -> dict:
        data = super().to_dict()
        data["from"] = self.current
        data["to"] = self.target
        return data


class DocumentLockedError(IllegalTransitionError):
    status_code = 403

    def __init__(self, status: str) -> None:
        super().__init__(status, status, f"Document is locked ({status}).")


class NotFoundError(LedgerError):
    status_code = 404

    def __init__(self, kind: str, record_id: str) -> None:
        self.kind = kind
        self.record_id = record_id
        super().__init__(f"{kind} {record_id} not found.")


class AllocationConflictError(LedgerError):
    status_code = 409


class TenantIsolationError(LedgerError):
    status_code = 403

    def __init__(self, kind: str, record_id: str) -> None:
        self.kind = kind
        self.record_id = record_id
        super().__init__(f"{kind} {record_id} belongs to another company.")
