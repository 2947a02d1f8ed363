from .settings import Settings, get_settings
from .options import UniqueValidationOptions

__all__ = ["Settings", "get_settings", "UniqueValidationOptions"]
