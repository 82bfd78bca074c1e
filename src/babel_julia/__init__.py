"""babel-julia - evaluate document source blocks in long-lived Julia sessions."""

from .errors import BabelJuliaError, ConfigurationError, InvalidVariableError, SessionError
from .framework import BabelFramework
from .request import EvaluationRequest, ResultKind, build_request
from .transport import SUPPRESSED_OUTPUT, Transport

__version__ = "0.1.0"

__all__ = [
    "SUPPRESSED_OUTPUT",
    "BabelFramework",
    "BabelJuliaError",
    "ConfigurationError",
    "EvaluationRequest",
    "InvalidVariableError",
    "ResultKind",
    "SessionError",
    "Transport",
    "build_request",
]
