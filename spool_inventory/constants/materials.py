# spool_inventory/constants/materials.py

# g/cm³, matched as a case-insensitive substring of the material type.
# Order matters: the first key contained in the type wins.
DENSITIES = {
    "pla": 1.24,
    "abs": 1.04,
    "petg": 1.27,
    "nylon": 1.15,
    "tpu": 1.21,
    "pc": 1.20,
    "asa": 1.07,
    "hips": 1.04,
}

DEFAULT_DENSITY = DENSITIES["pla"]

DEFAULT_DIAMETER_MM = 1.75
DEFAULT_SPOOL_SIZE_G = 1000.0
DEFAULT_MATERIAL = "pla"
