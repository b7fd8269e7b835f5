"""Exception hierarchy for the drill engine."""


class DrillError(Exception):
    """Base error for drill failures."""


class InvalidQuote(DrillError):
    """Quote failed the bid/ask sanity contract."""


class InvalidEstimate(DrillError):
    """Player estimate is not a positive finite number."""


class ConfigError(DrillError):
    """Invalid session settings."""


class SchemaError(DrillError):
    """Input schema or parsing error."""


class SessionClosed(DrillError):
    """Session has ended or its timer has run out."""
