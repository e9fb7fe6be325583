class AnalysisError(Exception):
    """Base error for a single contract analysis request"""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class MissingFileError(AnalysisError):
    status_code = 400


class FileTooLargeError(AnalysisError):
    status_code = 413


class UnsupportedTypeError(AnalysisError):
    status_code = 415


class ExternalCallError(AnalysisError):
    """The Gemini call itself failed (network, auth, quota, blocked reply)"""

    status_code = 502


class ThrottledError(ExternalCallError):
    status_code = 429


class ModelTransitionError(ExternalCallError):
    """The configured model is deprecated or being rolled over"""

    status_code = 503


class ParseFailureError(AnalysisError):
    """The model reply could not be turned into a valid analysis"""

    status_code = 502
