"""Exceptions raised by the bridge."""


class DuplicateError(RuntimeError):
    """An item that must be unique was registered twice."""


class MissingDependency(RuntimeError):
    """A component needs something that is not available."""


class IncompatibleDependency(RuntimeError):
    """A component depends on something of the wrong kind."""


class ConfigurationError(ValueError):
    """A configuration is inconsistent or invalid."""