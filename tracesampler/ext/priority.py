"""
Priority is a hint given to the backend so that it knows which traces to reject or kept.
In a distributed context, it should be set before any context propagation (fork, RPC calls) to be effective.

For example:

from tracesampler.ext.priority import USER_REJECT, USER_KEEP

# Indicate to not keep the trace
span.context.sampling_priority = USER_REJECT

# Indicate to keep the trace
span.context.sampling_priority = USER_KEEP
"""
from enum import IntEnum


class Priority(IntEnum):
    """Sampling priority levels, ordered from strongest reject to strongest keep"""

    # Use this to explicitly inform the backend that a trace should be rejected and not stored.
    USER_REJECT = -1
    # Used by the builtin sampler to inform the backend that a trace should be rejected and not stored.
    AUTO_REJECT = 0
    # Used by the builtin sampler to inform the backend that a trace should be kept and stored.
    AUTO_KEEP = 1
    # Use this to explicitly inform the backend that a trace should be kept and stored.
    USER_KEEP = 2


USER_REJECT = Priority.USER_REJECT
AUTO_REJECT = Priority.AUTO_REJECT
AUTO_KEEP = Priority.AUTO_KEEP
USER_KEEP = Priority.USER_KEEP


def is_user_priority(priority):
    """Return whether ``priority`` was set by an explicit user override."""
    return priority in (USER_REJECT, USER_KEEP)
