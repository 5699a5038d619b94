import os

from .deprecation import deprecation


def get_env(integration, variable, default=None):
    """Retrieves environment variables value for the given integration. It must be used
    for consistency across the package. The implementation is backward compatible
    with legacy nomenclature:

    * `DATADOG_` is a legacy prefix with lower priority
    * `DD_` environment variables have the highest priority
    * the environment variable is built concatenating `integration` and `variable`
      arguments, an empty `integration` reads `DD_<VARIABLE>`
    * return `default` otherwise

    """
    key = "_".join(part for part in (integration, variable) if part).upper()
    legacy_env = "DATADOG_{}".format(key)
    env = "DD_{}".format(key)

    value = os.getenv(env)
    legacy = os.getenv(legacy_env)
    if legacy:
        # Deprecation: `DATADOG_` variables are deprecated
        deprecation(
            name="DATADOG_", message="Use `DD_` prefix instead", version="1.0.0",
        )

    value = value or legacy
    return value if value else default


def asbool(value):
    """Convert the given String to a boolean object.

    Accepted values are `True` and `1`.
    """
    if value is None:
        return False

    if isinstance(value, bool):
        return value

    return value.lower() in ("true", "1")


def asfloat(value, default=None):
    """Convert the given String to a float, returning `default` for an unset value.

    Raises ``ValueError`` when the value is set but is not a number.
    """
    if value is None or value == "":
        return default

    return float(value)
