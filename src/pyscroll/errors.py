class ConfigurationError(ValueError):
    """
    Raised when the chart is wired incorrectly.

    Covers duplicate listener ids, missing range providers during a multi-axis
    reset, invalid window sizes, and axis lookups against an empty axis pool.
    These indicate a bug in the calling code, not a data condition.
    """
