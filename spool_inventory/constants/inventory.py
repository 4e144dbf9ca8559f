# spool_inventory/constants/inventory.py

# Bundle format generations:
#   1 - free-form ids, storageLocation/storageZone/storagePosition, netWeight
#   2 - locationPath + spoolLength, ids still free-form
#   3 - TYPE-NNNN-CCC ids with shared color codes
CURRENT_SCHEMA_VERSION = 3

PATH_SEPARATOR = "/"

TYPE_CODE_LENGTH = 4
SPOOL_NUMBER_WIDTH = 4
COLOR_CODE_WIDTH = 3

UNKNOWN_TYPE_CODE = "UNK"
UNKNOWN_COLOR_LABEL = "Unknown"

# Location filter value selecting spools without a location
UNSORTED_FILTER = "__UNSORTED__"

DEFAULT_COLOR_HEX = "#CCCCCC"
