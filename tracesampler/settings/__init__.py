from .config import Config

# Default global config
config = Config()

__all__ = [
    'config',
    'Config',
]
