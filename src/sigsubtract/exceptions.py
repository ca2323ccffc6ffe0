__all__ = ['SigsubtractError',
           'IncompatibleSketchError',
           'QueryResolutionError',
           'TargetResolutionError',
           'SignatureLoadError',
           'TargetIOError']


class SigsubtractError(Exception):
    def __init__(self, msg):
        Exception.__init__(self, msg)
        self.message = msg

    def __str__(self):
        return self.message


class IncompatibleSketchError(SigsubtractError):
    "No sketch in a signature matches the template, even after downsampling."
    def __init__(self, template):
        SigsubtractError.__init__(
            self, f"No sketch matching the provided template: {template}")
        self.template = template


class QueryResolutionError(IncompatibleSketchError):
    def __init__(self, filename, template):
        IncompatibleSketchError.__init__(self, template)
        self.filename = filename
        self.message = (f"Unable to load a sketch matching the provided "
                        f"template from query '{filename}': {template}")


class TargetResolutionError(IncompatibleSketchError):
    def __init__(self, filename, template):
        IncompatibleSketchError.__init__(self, template)
        self.filename = filename
        self.message = (f"Unable to load a sketch from '{filename}': "
                        f"no sketch matching the provided template: {template}")


class SignatureLoadError(SigsubtractError):
    def __init__(self, filename, reason):
        SigsubtractError.__init__(
            self, f"Error loading signature from '{filename}': {reason}")
        self.filename = filename
        self.reason = reason


class TargetIOError(SigsubtractError):
    def __init__(self, filename, operation, exc):
        SigsubtractError.__init__(
            self, f"Error {operation} '{filename}': {exc}")
        self.filename = filename
        self.operation = operation
