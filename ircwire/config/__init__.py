from .loader import ConfigLoader, load_config
from .model import ClientConfig

__all__ = ["ClientConfig", "ConfigLoader", "load_config"]
