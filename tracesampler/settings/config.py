from ..internal.logger import get_logger
from ..utils.formats import asbool, asfloat, get_env

log = get_logger(__name__)


class Config(object):
    """Global sampling settings.

    Values are read from the environment when the instance is created and can
    be overridden as plain attributes afterwards::

        from tracesampler import config

        config.sample_rate = 0.5
    """
    def __init__(self):
        sample_rate = get_env('trace', 'sample_rate')
        try:
            self.sample_rate = asfloat(sample_rate)
        except ValueError:
            # Fail open, no pre-sampling
            log.error('DD_TRACE_SAMPLE_RATE=%r is not a number, ignoring it', sample_rate)
            self.sample_rate = None

        self.priority_sampling = asbool(get_env('priority', 'sampling', default=True))

        # Fallback service and env used to look up per-service rates
        self.service = get_env('', 'service')
        self.env = get_env('', 'env')

        log.debug('loaded sampling configuration %r', self)

    def __repr__(self):
        cls = self.__class__
        return '{}.{}(sample_rate={!r}, priority_sampling={!r}, service={!r}, env={!r})'.format(
            cls.__module__, cls.__name__, self.sample_rate, self.priority_sampling, self.service, self.env,
        )
