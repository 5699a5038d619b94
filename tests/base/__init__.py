import contextlib
import unittest

import tracesampler

from ..utils import override_env


class BaseTestCase(unittest.TestCase):
    """
    BaseTestCase extends ``unittest.TestCase`` to provide some useful helpers/assertions


    Example::

        from tests.base import BaseTestCase


        class MyTestCase(BaseTestCase):
            def test_case(self):
                with self.override_global_config(dict(sample_rate=0.5)):
                    pass
    """

    # Expose `override_env` as `self.override_env`
    override_env = staticmethod(override_env)

    @staticmethod
    @contextlib.contextmanager
    def override_global_config(values):
        """
        Temporarily override the global configuration::

            >>> with self.override_global_config(dict(name=value,...)):
                # Your test
        """
        # DEV: Uses dict as interface but internally handled as attributes on Config instance
        names = ('sample_rate', 'priority_sampling', 'service', 'env')
        originals = dict((name, getattr(tracesampler.config, name)) for name in names)

        for name in names:
            setattr(tracesampler.config, name, values.get(name, originals[name]))
        try:
            yield
        finally:
            for name, value in originals.items():
                setattr(tracesampler.config, name, value)

    def assert_sample_rate(self, span, expected):
        """Assert on the span's `_sample_rate` metric"""
        metric = span.get_metric('_sample_rate')
        assert metric == expected, '%r != %r' % (metric, expected)
