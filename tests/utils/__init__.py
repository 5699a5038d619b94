import contextlib
import os
import random

from tracesampler.span import Span


@contextlib.contextmanager
def override_env(env):
    """
    Temporarily override ``os.environ`` with provided values::

        >>> with override_env(dict(DD_TRACE_SAMPLE_RATE='0.5')):
            # Your test
    """
    # Copy the full original environment
    original = dict(os.environ)

    # Update based on the passed in arguments
    os.environ.update(env)
    try:
        yield
    finally:
        # Full clear the environment out and reset back to the original
        os.environ.clear()
        os.environ.update(original)


def make_spans(count, **kwargs):
    """Create ``count`` spans with trace ids ``1..count``"""
    return [Span('test.span', trace_id=trace_id, **kwargs) for trace_id in range(1, count + 1)]


def make_random_spans(count, seed=123, **kwargs):
    """Create ``count`` spans with 64 bit trace ids drawn from a seeded generator"""
    rng = random.Random(seed)
    return [Span('test.span', trace_id=rng.getrandbits(64), **kwargs) for _ in range(count)]
