from fastapi import HTTPException
from spool_inventory.constants.error_codes import ErrorCode


class AppException(HTTPException):
    def __init__(
        self,
        status_code: int,
        message: str,
        error_code: ErrorCode,
        details: dict | None = None,
    ):
        super().__init__(status_code=status_code, detail=message)
        self.error_code = error_code
        self.details = details


class DuplicatePathError(AppException):
    def __init__(self, path: str):
        super().__init__(
            409,
            f"Location '{path}' already exists",
            ErrorCode.LOCATION_PATH_EXISTS,
            {"path": path},
        )


class LocationNotFoundError(AppException):
    def __init__(self, path: str):
        super().__init__(
            404,
            f"Location '{path}' not found",
            ErrorCode.LOCATION_NOT_FOUND,
            {"path": path},
        )


class MalformedIdError(AppException):
    def __init__(self, spool_id: str):
        super().__init__(
            400,
            f"'{spool_id}' is not a TYPE-NNNN-CCC spool id",
            ErrorCode.MALFORMED_ID,
            {"id": spool_id},
        )


class ReidentificationRequired(AppException):
    """Type or color label changed; the caller must confirm a new id."""

    def __init__(self, spool_id: str, changes: list[str]):
        super().__init__(
            409,
            "Changing type or manufacturer color issues a new spool id "
            "and invalidates the printed label",
            ErrorCode.REIDENTIFICATION_REQUIRED,
            {"id": spool_id, "changes": changes},
        )
