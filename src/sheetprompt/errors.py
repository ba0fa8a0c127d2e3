"""Error types raised while resolving ranges and dispatching prompts."""


class SheetPromptError(Exception):
    """Base class for all SheetPrompt errors."""


class InvalidRangeError(SheetPromptError):
    """A start row, row count or column letter is not usable."""


class InvalidModelTypeError(SheetPromptError):
    """The requested model type is not one of the recognized kinds."""


class InvalidModelError(SheetPromptError):
    """The model identifier is not accepted by the provider."""


class CredentialMissingError(SheetPromptError):
    """A provider API key is not configured."""


class ModelError(SheetPromptError):
    """The provider returned an error instead of a completion."""


class UnimplementedError(SheetPromptError):
    """The requested capability exists in the UI but has no backend."""


class SpreadsheetError(SheetPromptError):
    """The spreadsheet backend failed to read or write."""


class SheetNotFoundError(SpreadsheetError):
    """The named sheet does not exist."""

    def __init__(self, sheet: str):
        self.sheet = sheet
        super().__init__(f"Sheet {sheet} not found")


class WriteError(SheetPromptError):
    """Results could not be written to the destination range."""
