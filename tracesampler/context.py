from .constants import SAMPLING_PRIORITY_KEY


class Context(object):
    """
    Context holds the state shared by every span of a single logical trace.

    It is created once at the root span (or extracted from a propagated
    request) and referenced by each span of that trace. The only state the
    samplers touch is ``sampling_priority``.

    ``sampling_priority`` is deliberately not guarded by a lock: when two
    spans of the same trace resolve the priority concurrently both writes
    come from the same sampling process and the last one wins.
    """

    __slots__ = ('_parent_trace_id', '_parent_span_id', '_sampling_priority')

    def __init__(self, trace_id=None, span_id=None, sampling_priority=None):
        """
        Initialize a new ``Context``.

        :param int trace_id: trace_id of parent span
        :param int span_id: span_id of parent span
        :param sampling_priority: priority propagated from upstream, if any
        """
        self._parent_trace_id = trace_id
        self._parent_span_id = span_id
        self._sampling_priority = sampling_priority

    @property
    def trace_id(self):
        """Return current context trace_id."""
        return self._parent_trace_id

    @property
    def span_id(self):
        """Return current context span_id."""
        return self._parent_span_id

    @property
    def sampling_priority(self):
        """Return current context sampling priority, ``None`` when undecided."""
        return self._sampling_priority

    @sampling_priority.setter
    def sampling_priority(self, value):
        """Set sampling priority."""
        self._sampling_priority = value

    def clone(self):
        """Return a new ``Context`` carrying the same trace id, span id and priority."""
        return Context(
            trace_id=self._parent_trace_id,
            span_id=self._parent_span_id,
            sampling_priority=self._sampling_priority,
        )

    def to_metrics(self):
        """
        Metrics a transport layer attaches to the root span of the trace.

        :returns: ``{'_sampling_priority_v1': priority}``, or an empty dict when no priority was decided
        :rtype: :obj:`dict`
        """
        if self._sampling_priority is None:
            return {}
        return {SAMPLING_PRIORITY_KEY: int(self._sampling_priority)}

    def __repr__(self):
        return 'Context(trace_id=%s, span_id=%s, sampling_priority=%s)' % (
            self._parent_trace_id,
            self._parent_span_id,
            self._sampling_priority,
        )
