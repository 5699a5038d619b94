import collections
import logging

from ..utils.formats import get_env


def get_logger(name):
    """
    Retrieve or create a ``SamplerLogger`` instance.

    Loggers already registered under ``name`` are returned unchanged, so an
    application that configured ``tracesampler`` loggers itself keeps them.
    ``logging.setLoggerClass()`` is left alone.

    :param name: The name of the logger to fetch or create
    :type name: str
    :return: The logger instance
    :rtype: ``SamplerLogger``
    """
    manager = logging.Logger.manager

    logger = manager.loggerDict.get(name)
    if isinstance(logger, logging.Logger):
        return logger

    placeholder = logger
    logger = SamplerLogger(name=name)
    manager.loggerDict[name] = logger

    # Children requested before us hang off a placeholder
    if isinstance(placeholder, logging.PlaceHolder) and hasattr(manager, "_fixupChildren"):
        manager._fixupChildren(placeholder, logger)

    if hasattr(manager, "_fixupParents"):
        manager._fixupParents(logger)

    return logger


class SamplerLogger(logging.Logger):
    """
    Rate limited logger used by ``tracesampler``

    Sampling decisions happen for every trace, so a misconfiguration can
    produce the same log line thousands of times per second. This logger
    emits each distinct log call site at most once per ``rate_limit`` seconds.
    """

    __slots__ = ("buckets", "rate_limit")

    LoggingBucket = collections.namedtuple("LoggingBucket", ("bucket", "skipped"))

    def __init__(self, *args, **kwargs):
        super(SamplerLogger, self).__init__(*args, **kwargs)

        self.buckets = collections.defaultdict(lambda: SamplerLogger.LoggingBucket(0, 0))

        # Seconds per call site, 0 disables rate limiting
        self.rate_limit = int(get_env("logging", "rate_limit", default=60))

    def handle(self, record):
        """
        Call the handlers for ``record`` unless its call site already logged
        within the current time bucket.

        :param record: The log record being logged
        :type record: ``logging.LogRecord``
        """
        if not self.rate_limit:
            super(SamplerLogger, self).handle(record)
            return

        current_bucket = int(record.created / self.rate_limit)
        call_site = (record.name, record.levelno, record.pathname, record.lineno)

        logging_bucket = self.buckets[call_site]
        if logging_bucket.bucket == current_bucket:
            self.buckets[call_site] = logging_bucket._replace(skipped=logging_bucket.skipped + 1)
            return

        if logging_bucket.skipped:
            record.msg = "{}, %s additional messages skipped".format(record.msg)
            record.args = tuple(record.args or ()) + (logging_bucket.skipped,)

        self.buckets[call_site] = SamplerLogger.LoggingBucket(current_bucket, 0)
        super(SamplerLogger, self).handle(record)
