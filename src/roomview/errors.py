"""Exceptions raised by the camera navigation subsystem."""


class ConfigurationError(ValueError):
    """Raised at construction time when a camera or navigation setting is invalid."""


class ControlsNotInitializedError(RuntimeError):
    """Raised when a control method is called before initControls()."""

    def __init__(self, operation=None):
        if operation:
            message = "Controls not initialized, cannot call %s()." % operation
        else:
            message = "Controls not initialized."
        super().__init__(message)
        self.operation = operation
