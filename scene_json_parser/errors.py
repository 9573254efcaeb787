"""
Exception types for the Scene JSON Parser.

Every error carries a user-facing message and a short error code. Messages
are safe to show in the UI; internal details stay in the logs.
"""


class SceneParserError(Exception):
    """Base exception for all parser errors."""

    def __init__(self, message: str, error_code: str = "SCENE_PARSER_ERROR"):
        self.message = message
        self.error_code = error_code
        super().__init__(self.message)


class InputMissingError(SceneParserError):
    """Raised when parse is requested with empty input."""

    def __init__(self, message: str = "Please paste some JSON first."):
        super().__init__(message, error_code="INPUT_MISSING")


class InvalidJsonError(SceneParserError):
    """Raised when the input is not JSON or its top level is not an array."""

    def __init__(self, message: str = "Invalid JSON format. Please check your input."):
        super().__init__(message, error_code="INVALID_JSON")


class NoMatchingFieldsError(SceneParserError):
    """Raised when the JSON is well formed but no string field was extracted."""

    def __init__(
        self,
        message: str = (
            "JSON parsed successfully, but no matching fields "
            "(master_prompts, audio, text) were found."
        ),
    ):
        super().__init__(message, error_code="NO_MATCHING_FIELDS")


class NothingToExportError(SceneParserError):
    """Raised when an archive export is requested with no field selected."""

    def __init__(self, message: str = "No fields selected to download."):
        super().__init__(message, error_code="NOTHING_TO_EXPORT")


class AIRequestFailedError(SceneParserError):
    """Raised when the AI call fails. The message is deliberately generic."""

    def __init__(self, message: str = "Failed to generate AI response. Please try again."):
        super().__init__(message, error_code="AI_REQUEST_FAILED")


class ConfigurationError(SceneParserError):
    """Raised when a required setting is missing or malformed."""

    def __init__(self, message: str):
        super().__init__(message, error_code="CONFIG_ERROR")
