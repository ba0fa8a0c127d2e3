"""SheetPrompt - apply AI prompts to spreadsheet columns."""

__version__ = "0.1.0"
