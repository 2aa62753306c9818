from typing import Any

class LocalizerError(Exception):
    def __init__(self, message : str|None = None, error : Exception|None = None):
        super().__init__(message)
        self.error = error
        self.message = message

    def __str__(self) -> str:
        if self.error:
            return str(self.error)
        elif self.message:
            return self.message
        return super().__str__()

class ConfigurationError(LocalizerError):
    """ Invalid or missing run configuration, fatal before any remote call """
    def __init__(self, message : str):
        super().__init__(message)

class SourceContentError(LocalizerError):
    """ The source-locale baseline could not be found, aborts the run """
    def __init__(self, message : str):
        super().__init__(message)

class TranslationError(LocalizerError):
    """
    A field could not be translated after exhausting all attempts
    """
    LIKELY_TOO_LONG_THRESHOLD = 1000

    def __init__(self, context_tag : str, target_language : str, text_length : int, original_message : str|None = None, error : Exception|None = None):
        message = f"Translation of {context_tag} to {target_language} failed ({text_length} characters): {original_message or error}"
        super().__init__(message)
        self.error = error
        self.context_tag = context_tag
        self.target_language = target_language
        self.text_length = text_length
        self.original_message = original_message

    @property
    def likely_too_long(self) -> bool:
        return self.text_length > self.LIKELY_TOO_LONG_THRESHOLD

    def __str__(self) -> str:
        return self.message or super().__str__()

class TranslationResponseError(LocalizerError):
    def __init__(self, message : str, response : Any = None):
        super().__init__(message)
        self.response = response

class StoreError(LocalizerError):
    """ A generic failure communicating with the metadata store """
    def __init__(self, message : str, status_code : int|None = None, error : Exception|None = None):
        super().__init__(message, error)
        self.status_code = status_code

    def __str__(self) -> str:
        return self.message or super().__str__()
