import math
import random

from .constants import ENV_KEY, MANUAL_DROP_KEY, MANUAL_KEEP_KEY
from .ext import priority
from .internal.logger import get_logger


log = get_logger(__name__)

# Trace and span ids are unsigned 64 bit integers
MAX_TRACE_ID = 2 ** 64

numeric_types = (int, float)


class Span(object):
    """
    The view of a span the samplers work with.

    Samplers read ``trace_id``, ``service`` and the ``env`` tag, write
    ``sampled`` and ``metrics``, and reach the shared trace state through
    ``context``.
    """

    __slots__ = [
        'service',
        'name',
        'span_id',
        'trace_id',
        'parent_id',
        'meta',
        'metrics',
        # Sampler attributes
        'sampled',
        # Internal attributes
        '_context',
        '__weakref__',
    ]

    def __init__(
        self,
        name,

        service=None,
        trace_id=None,
        span_id=None,
        parent_id=None,
        context=None,
    ):
        """
        Create a new span.

        :param str name: the name of the traced operation.
        :param str service: the service name

        :param int trace_id: the id of this trace's root span.
        :param int span_id: the id of this span.
        :param int parent_id: the id of this span's direct parent span.

        :param context: the :class:`tracesampler.context.Context` shared by the trace, if any.
        """
        self.name = name
        self.service = service

        self.meta = {}
        self.metrics = {}

        # DEV: `0` is a valid trace id, only generate one when none was given
        self.trace_id = _new_id() if trace_id is None else trace_id
        self.span_id = _new_id() if span_id is None else span_id
        self.parent_id = parent_id

        self.sampled = True

        self._context = context

    @property
    def context(self):
        """
        The :class:`tracesampler.context.Context` shared by every span of this trace,
        ``None`` for a standalone span.
        """
        return self._context

    @property
    def env(self):
        """The ``env`` tag of this span, ``None`` when not set."""
        return self.meta.get(ENV_KEY)

    def set_tag(self, key, value=None):
        """ Set the given key / value tag pair on the span.

            Integers up to 2^53 and floats are stored as metrics, anything else
            is stored as a string. ``manual.keep`` and ``manual.drop`` set a user
            priority on the trace instead of being stored.
        """
        if key == MANUAL_KEEP_KEY:
            self._set_user_priority(priority.USER_KEEP)
            return
        elif key == MANUAL_DROP_KEY:
            self._set_user_priority(priority.USER_REJECT)
            return

        is_an_int = isinstance(value, int) and not isinstance(value, bool)
        if (is_an_int and abs(value) <= 2 ** 53) or isinstance(value, float):
            self.set_metric(key, value)
            return

        try:
            self.meta[key] = str(value)
            if key in self.metrics:
                del self.metrics[key]
        except Exception:
            log.debug('error setting tag %s, ignoring it', key, exc_info=True)

    def _set_user_priority(self, user_priority):
        if self._context is None:
            log.debug('span %r has no context, ignoring user priority %s', self, user_priority)
            return
        self._context.sampling_priority = user_priority

    def get_tag(self, key):
        """ Return the given tag or None if it doesn't exist.
        """
        return self.meta.get(key, None)

    def set_tags(self, tags):
        if tags:
            for k, v in tags.items():
                self.set_tag(k, v)

    def set_metric(self, key, value):
        # only permit types that are commonly serializable (don't use
        # isinstance so that we convert unserializable types like numpy
        # numbers)
        if type(value) not in numeric_types:
            try:
                value = float(value)
            except (ValueError, TypeError):
                log.debug('ignoring not number metric %s:%s', key, value)
                return

        # don't allow nan or inf
        if math.isnan(value) or math.isinf(value):
            log.debug('ignoring not real metric %s:%s', key, value)
            return

        if key in self.meta:
            del self.meta[key]
        self.metrics[key] = value

    def get_metric(self, key):
        return self.metrics.get(key)

    def to_dict(self):
        d = {
            'trace_id': self.trace_id,
            'parent_id': self.parent_id,
            'span_id': self.span_id,
            'service': self.service,
            'name': self.name,
        }

        if self.meta:
            d['meta'] = self.meta

        if self.metrics:
            d['metrics'] = self.metrics

        return d

    def __repr__(self):
        return '<Span(id=%s,trace_id=%s,parent_id=%s,name=%s)>' % (
            self.span_id,
            self.trace_id,
            self.parent_id,
            self.name,
        )


def _new_id():
    """Generate a random trace_id or span_id"""
    return random.getrandbits(64)
