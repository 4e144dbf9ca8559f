# Inventory
from spool_inventory.models.inventory.bundle_models import BundleSnapshot
