"""
Blueprint Import
Converts blueprint JSON documents into editor screens
"""

from .parser import BlueprintParser, parse_blueprint
from .builder import BlueprintBuilder, BuildResult
from .schema import Blueprint

__all__ = ["BlueprintParser", "parse_blueprint", "BlueprintBuilder", "BuildResult", "Blueprint"]
