# spool_inventory/models/enums/spool_status.py

from enum import Enum


class SpoolStatus(str, Enum):
    SEALED = "sealed"
    OPENED = "opened"
    ON_PRINTER = "on_printer"


# Labels written by the first releases of the bundle format
LEGACY_STATUS_LABELS = {
    "Originalverpackt": SpoolStatus.SEALED,
    "Angebrochen": SpoolStatus.OPENED,
    "Auf Drucker": SpoolStatus.ON_PRINTER,
}
