# turtle_dojo/domains/turtle/errors.py

class ScriptError(ValueError):
    """A learner mistake that halts the run. Carries the 1-based line number."""

    def __init__(self, message: str, line_number=None):
        super().__init__(message)
        self.message = message
        self.line_number = line_number

    def __str__(self):
        if self.line_number is None:
            return self.message
        return f"Line {self.line_number}: {self.message}"

class MalformedArgumentError(ScriptError):
    pass

class MalformedRepetitionCountError(ScriptError):
    pass

class NestedRepetitionError(MalformedRepetitionCountError):
    pass
