from importlib import metadata

from .context import Context
from .ext.priority import Priority
from .sampler import AllSampler, PrioritySampler, RateByServiceSampler, RateSampler, build_sampler
from .settings import config
from .span import Span


try:
    __version__ = metadata.version(__name__)
except metadata.PackageNotFoundError:
    # package is not installed
    __version__ = None


__all__ = [
    'AllSampler',
    'build_sampler',
    'config',
    'Context',
    'Priority',
    'PrioritySampler',
    'RateByServiceSampler',
    'RateSampler',
    'Span',
]
