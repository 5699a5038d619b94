from setuptools import setup, find_packages


long_description = """
# tracesampler

`tracesampler` is the trace sampling decision engine of a distributed tracing
library. It decides, once per trace, whether spans are kept, consistently across
every service a trace goes through, and records the sampling priority and rate
metadata a backend needs to extrapolate counts from sampled traces.

## Getting Started

```python
from tracesampler import PrioritySampler, RateSampler

sampler = PrioritySampler(base_sampler=RateSampler(0.5))
sampler.decide(root_span)
```

The default sampler can also be built from the environment
(`DD_TRACE_SAMPLE_RATE`, `DD_PRIORITY_SAMPLING`) with
`tracesampler.build_sampler()`.
"""

setup(
    name="tracesampler",
    version="0.1.0",
    description="Trace sampling decision engine",
    long_description=long_description,
    long_description_content_type="text/markdown",
    license="BSD",
    packages=find_packages(exclude=["tests*"]),
    python_requires=">=3.8",
    install_requires=[],
    extras_require={
        "tests": ["pytest", "mock"],
    },
    classifiers=[
        "Programming Language :: Python",
        "Programming Language :: Python :: 3",
    ],
)
