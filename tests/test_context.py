import threading

import pytest

from tracesampler.constants import SAMPLING_PRIORITY_KEY
from tracesampler.context import Context
from tracesampler.ext.priority import USER_REJECT, AUTO_REJECT, AUTO_KEEP, USER_KEEP
from tracesampler.sampler import PrioritySampler, RateByServiceSampler
from tracesampler.span import Span

from .base import BaseTestCase


class TestTracingContext(BaseTestCase):
    """
    Tests related to the ``Context`` class that holds the state shared by the spans of a trace.
    """
    def test_defaults(self):
        ctx = Context()
        assert ctx.trace_id is None
        assert ctx.span_id is None
        assert ctx.sampling_priority is None

    def test_propagated_values(self):
        ctx = Context(trace_id=42, span_id=43, sampling_priority=USER_KEEP)
        assert ctx.trace_id == 42
        assert ctx.span_id == 43
        assert ctx.sampling_priority is USER_KEEP

    def test_sampling_priority(self):
        ctx = Context()
        for priority in [USER_REJECT, AUTO_REJECT, AUTO_KEEP, USER_KEEP, None, 999]:
            ctx.sampling_priority = priority
            assert ctx.sampling_priority == priority

    def test_shared_by_spans(self):
        ctx = Context()
        root = Span('root', trace_id=1, context=ctx)
        child = Span('child', trace_id=1, parent_id=root.span_id, context=ctx)

        root.context.sampling_priority = AUTO_KEEP
        assert child.context.sampling_priority is AUTO_KEEP

    def test_clone(self):
        ctx = Context(trace_id=10, span_id=20, sampling_priority=AUTO_KEEP)
        cloned_ctx = ctx.clone()
        assert cloned_ctx is not ctx
        assert cloned_ctx.trace_id == 10
        assert cloned_ctx.span_id == 20
        assert cloned_ctx.sampling_priority is AUTO_KEEP

        cloned_ctx.sampling_priority = USER_REJECT
        assert ctx.sampling_priority is AUTO_KEEP

    def test_to_metrics(self):
        ctx = Context()
        assert ctx.to_metrics() == {}

        ctx.sampling_priority = USER_REJECT
        assert ctx.to_metrics() == {SAMPLING_PRIORITY_KEY: -1}

        ctx.sampling_priority = AUTO_KEEP
        metrics = ctx.to_metrics()
        assert metrics == {SAMPLING_PRIORITY_KEY: 1}
        assert type(metrics[SAMPLING_PRIORITY_KEY]) is int

    def test_repr(self):
        ctx = Context(trace_id=1, span_id=2)
        assert repr(ctx) == 'Context(trace_id=1, span_id=2, sampling_priority=None)'


@pytest.mark.parametrize('trace_id', [1, 9])
def test_concurrent_priority_resolution(trace_id):
    # Spans of one trace racing to resolve the priority all get the same verdict
    sampler = PrioritySampler(post_sampler=RateByServiceSampler(0.5))
    ctx = Context()
    spans = [Span('span', trace_id=trace_id, context=ctx) for _ in range(20)]
    barrier = threading.Barrier(len(spans))

    def decide(span):
        barrier.wait()
        sampler.decide(span)

    threads = [threading.Thread(target=decide, args=(span,)) for span in spans]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    expected = AUTO_KEEP if trace_id == 1 else AUTO_REJECT
    assert ctx.sampling_priority is expected
    assert all(span.sampled for span in spans)
