from .firms import Firm, FirmRegistryError, load_firms, parse_firms
from .settings import Settings, settings

__all__ = ["Firm", "FirmRegistryError", "Settings", "settings", "load_firms", "parse_firms"]
