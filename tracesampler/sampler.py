"""Samplers manage the client-side trace sampling

A sampler is asked once per locally originated trace, at its root span,
whether the trace is kept. ``sample`` only computes the verdict, ``decide``
applies it to the span: it sets ``span.sampled`` and the metrics the backend
needs to extrapolate counts from a sampled population.
"""
import abc

from .constants import SAMPLE_RATE_METRIC_KEY, SAMPLING_AGENT_DECISION
from .ext.priority import AUTO_KEEP, AUTO_REJECT
from .internal.logger import get_logger
from .settings import config as global_config
from .span import MAX_TRACE_ID

log = get_logger(__name__)

# Has to be the same factor and key as the Agent to allow chained sampling
KNUTH_FACTOR = 1111111111111111111


def _normalize_sample_rate(sample_rate):
    """Clamp ``sample_rate`` to ``(0.0, 1.0]``; a missing or negative rate keeps everything."""
    sample_rate = float(sample_rate)

    # DEV: `not >` also catches NaN
    if not sample_rate > 0:
        log.error('sample_rate %r is negative or null, disable the Sampler', sample_rate)
        return 1.0
    elif sample_rate > 1:
        log.warning('sample_rate %r is greater than 1, sampling all traces', sample_rate)
        return 1.0

    return sample_rate


class BaseSampler(metaclass=abc.ABCMeta):
    __slots__ = ()

    @abc.abstractmethod
    def sample(self, span):
        """
        Return whether ``span`` should be kept, without modifying it

        :param span: The root span of a trace
        :type span: :class:`tracesampler.span.Span`
        :rtype: :obj:`bool`
        """

    def decide(self, span):
        """
        Decide whether the provided span is kept and record the decision on it

        :param span: The root span of a trace
        :type span: :class:`tracesampler.span.Span`
        :returns: Whether the span was sampled or not
        :rtype: :obj:`bool`
        """
        sampled = bool(self.sample(span))
        span.sampled = sampled
        if sampled:
            self._tag_kept_span(span)
        return sampled

    def _tag_kept_span(self, span):
        pass

    def effective_rate(self, span):
        """
        Return the rate this sampler applies to ``span``, or ``None`` if it has no notion of a rate

        :rtype: :obj:`float` or ``None``
        """
        return None


class AllSampler(BaseSampler):
    """Sampler sampling all the traces"""

    def sample(self, span):
        return True

    def effective_rate(self, span):
        return 1.0

    def __repr__(self):
        return "{}()".format(self.__class__.__name__)


class RateSampler(BaseSampler):
    """Sampler based on a rate

    Keep (100 * `sample_rate`)% of the traces.
    The decision only depends on the trace id, so every process sampling the
    same trace with the same rate reaches the same decision.
    """

    def __init__(self, sample_rate=1.0):
        self.set_sample_rate(sample_rate)

        log.debug('initialized RateSampler, sample %s%% of traces', 100 * self.sample_rate)

    def set_sample_rate(self, sample_rate):
        self.sample_rate = _normalize_sample_rate(sample_rate)
        self.sampling_id_threshold = self.sample_rate * MAX_TRACE_ID

    def sample(self, span):
        return ((span.trace_id * KNUTH_FACTOR) % MAX_TRACE_ID) < self.sampling_id_threshold

    def _tag_kept_span(self, span):
        # The rate is global and stable, the backend scales counts by its inverse
        span.set_metric(SAMPLE_RATE_METRIC_KEY, self.sample_rate)

    def effective_rate(self, span):
        return self.sample_rate

    def __repr__(self):
        return '{}(sample_rate={!r})'.format(self.__class__.__name__, self.sample_rate)


class RateByServiceSampler(BaseSampler):
    """Sampler based on a rate, by service

    Keep (100 * `sample_rate`)% of the traces.
    The sample rate is kept independently for each service/env tuple and
    the whole table can be replaced with rates recommended by the backend.
    """

    @staticmethod
    def _key(service=None, env=None):
        """Compute a key with the same format used by the agent API."""
        service = service or ''
        env = env or ''
        return 'service:' + service + ',env:' + env

    def __init__(self, sample_rate=1.0):
        self.sample_rate = _normalize_sample_rate(sample_rate)
        self._by_service_samplers = self._get_new_by_service_sampler()

    def _get_new_by_service_sampler(self):
        return {
            self._default_key: RateSampler(self.sample_rate)
        }

    def set_sample_rate(self, sample_rate, service='', env=''):
        self._by_service_samplers[self._key(service, env)] = RateSampler(sample_rate)

    def _sampler_for(self, span):
        key = self._key(span.service or global_config.service, span.env or global_config.env)

        # DEV: Read the table once, it may be swapped by another thread
        samplers = self._by_service_samplers
        return samplers.get(key) or samplers[self._default_key]

    def sample(self, span):
        return self._sampler_for(span).sample(span)

    def decide(self, span):
        sampler = self._sampler_for(span)
        span.set_metric(SAMPLING_AGENT_DECISION, sampler.sample_rate)
        return sampler.decide(span)

    def effective_rate(self, span):
        return self._sampler_for(span).sample_rate

    def update_rate_by_service_sample_rates(self, rate_by_service):
        """
        Replace the per-service rates

        :param rate_by_service: Rates keyed by ``'service:<service>,env:<env>'``
        :type rate_by_service: :obj:`dict`
        """
        new_by_service_samplers = self._get_new_by_service_sampler()
        for key, sample_rate in rate_by_service.items():
            new_by_service_samplers[key] = RateSampler(sample_rate)

        self._by_service_samplers = new_by_service_samplers
        log.debug('updated rates by service: %r', rate_by_service)


# Default key for service with no specific rate
RateByServiceSampler._default_key = RateByServiceSampler._key()


class PrioritySampler(BaseSampler):
    """
    Sampler combining an optional pre-sampler with priority sampling

    The ``base_sampler`` runs first and tags the span with its rate when it
    keeps it. Then, unless the trace already carries a priority (propagated
    from upstream or set by the user), the ``post_sampler`` verdict becomes
    the ``AUTO_KEEP`` / ``AUTO_REJECT`` priority of the trace. A trace the
    ``base_sampler`` dropped gets ``AUTO_REJECT`` without asking the
    ``post_sampler``.

    Spans are always kept locally: the priority tells the backend what to do
    with the trace, and dropping here would leave it an incomplete dataset.
    """

    def __init__(self, base_sampler=None, post_sampler=None):
        """
        :param base_sampler: Sampler applied to every trace, default :class:`AllSampler`
        :type base_sampler: :class:`BaseSampler`
        :param post_sampler: Sampler choosing the priority of undecided traces, default :class:`AllSampler`
        :type post_sampler: :class:`BaseSampler`
        """
        self._pre_sampler = base_sampler or AllSampler()
        self._post_sampler = post_sampler or AllSampler()

    def sample(self, span):
        return True

    def decide(self, span):
        # NOTE: Pre-sampling at rates < 100% may result in partial traces; not recommended.
        pre_sampled = True
        if self._should_pre_sample(span):
            pre_sampled = self._pre_sampler.decide(span)

        context = span.context
        if context is not None and context.sampling_priority is None:
            # Dropped by the pre-sampler, the span has no `_sample_rate` and must not be counted as kept
            if not pre_sampled:
                context.sampling_priority = AUTO_REJECT
            # DEV: Only the post-sampler verdict is used, its rate is adaptive and
            #      must not be mistaken for a scaling factor by the backend
            elif self._post_sampler.sample(span):
                context.sampling_priority = AUTO_KEEP
            else:
                context.sampling_priority = AUTO_REJECT

        # Priority sampling *always* samples.
        span.sampled = True
        return True

    def _should_pre_sample(self, span):
        rate = self._pre_sampler.effective_rate(span)
        return rate is None or rate < 1.0

    def update_rate_by_service_sample_rates(self, rate_by_service):
        """Forward backend recommended rates to the post-sampler, if it takes them."""
        update = getattr(self._post_sampler, 'update_rate_by_service_sample_rates', None)
        if update is None:
            log.debug('%r does not support rates by service, ignoring %r', self._post_sampler, rate_by_service)
            return
        update(rate_by_service)

    def __repr__(self):
        return '{}(base_sampler={!r}, post_sampler={!r})'.format(
            self.__class__.__name__, self._pre_sampler, self._post_sampler,
        )


def build_sampler(config=None):
    """
    Build the top-level sampler described by ``config``

    :param config: Settings to use, default the global :class:`tracesampler.settings.Config`
    :returns: A :class:`PrioritySampler` when priority sampling is enabled, a rate or all sampler otherwise
    :rtype: :class:`BaseSampler`
    """
    config = config or global_config

    base_sampler = AllSampler()
    if config.sample_rate is not None:
        base_sampler = RateSampler(config.sample_rate)

    if not config.priority_sampling:
        return base_sampler

    return PrioritySampler(base_sampler=base_sampler, post_sampler=RateByServiceSampler())
