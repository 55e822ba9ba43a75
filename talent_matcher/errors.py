# talent_matcher/errors.py


class ConfigurationError(ValueError):
    """
    Raised when a weight, exchange-rate or badge table is malformed.
    These are deployment defects and surface when the config is built, never per call.
    """
