class ConfigurationError(ValueError):
    """Rocket geometry, motor selection or run parameters cannot be simulated."""


class MotorParseError(ValueError):
    """Motor data file is malformed; no motor data available."""
