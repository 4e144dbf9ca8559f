# spool_inventory/constants/error_codes.py

from enum import Enum


class ErrorCode(str, Enum):
    # -----------------
    # GENERIC
    # -----------------
    VALIDATION_ERROR = "VALIDATION_ERROR"
    NOT_FOUND = "NOT_FOUND"
    CONFLICT = "CONFLICT"
    UNAUTHORIZED = "UNAUTHORIZED"
    PERMISSION_DENIED = "PERMISSION_DENIED"
    INTERNAL_ERROR = "INTERNAL_ERROR"
    CONFIRMATION_REQUIRED = "CONFIRMATION_REQUIRED"

    # -----------------
    # FILAMENTS
    # -----------------
    FILAMENT_NOT_FOUND = "FILAMENT_NOT_FOUND"
    REIDENTIFICATION_REQUIRED = "REIDENTIFICATION_REQUIRED"
    MALFORMED_ID = "MALFORMED_ID"

    # -----------------
    # LOCATIONS
    # -----------------
    LOCATION_NOT_FOUND = "LOCATION_NOT_FOUND"
    LOCATION_PATH_EXISTS = "LOCATION_PATH_EXISTS"
    LOCATION_NAME_INVALID = "LOCATION_NAME_INVALID"

    # -----------------
    # PRINTERS
    # -----------------
    PRINTER_NOT_FOUND = "PRINTER_NOT_FOUND"

    # -----------------
    # SCANNING
    # -----------------
    SCAN_CODE_UNKNOWN = "SCAN_CODE_UNKNOWN"
    SCAN_TARGET_NOT_FOUND = "SCAN_TARGET_NOT_FOUND"
