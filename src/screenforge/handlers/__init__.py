"""Handlers for editor requests."""

from .command import CommandHandler, CommandResult
from .blueprint import BlueprintImportHandler
from .document import DocumentHandler

__all__ = ["CommandHandler", "CommandResult", "BlueprintImportHandler", "DocumentHandler"]
