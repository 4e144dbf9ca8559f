# spool_inventory/constants/scan_codes.py

from enum import Enum

SCAN_SEPARATOR = "::"


class ScanKind(str, Enum):
    SPOOL = "FMT_SPOOL"
    LOCATION = "FMT_LOCATION"
