"""
Error taxonomy for the essay diagnostic pipeline.

Only ConfigurationGap and MalformedModelOutput are raised to callers of the
public helpers; AnalyzerFailure and HolisticFailure are caught inside the
orchestrator and the holistic analyzer and turned into degraded results.
"""


class EssayDiagnosticError(Exception):
    """Base class for all pipeline errors"""


class AnalyzerFailure(EssayDiagnosticError):
    """A single dimension scorer failed (exception or external call failure)"""

    def __init__(self, dimension: str, cause: BaseException = None):
        self.dimension = dimension
        self.cause = cause
        message = f"Analyzer '{dimension}' failed"
        if cause is not None:
            message += f": {cause}"
        super().__init__(message)


class HolisticFailure(EssayDiagnosticError):
    """The consolidated holistic call failed or returned unusable structure"""


class MalformedModelOutput(EssayDiagnosticError):
    """Structured model output could not be parsed into the expected shape"""

    def __init__(self, message: str, raw: str = ""):
        self.raw = raw
        if raw:
            message = f"{message}\nResponse: {raw[:500]}"
        super().__init__(message)


class ConfigurationGap(EssayDiagnosticError):
    """Prompt category missing from the routing/weight configuration"""

    def __init__(self, prompt_type):
        self.prompt_type = prompt_type
        super().__init__(f"Unknown prompt type: '{prompt_type}'")
