"""
Command Interpretation
Free-text commands to editor operations
"""

from .base import Interpretation, InterpretationContext, Interpreter
from .local import LocalRuleInterpreter
from .remote import RemoteInterpreter
from .selector import FallbackInterpreter

__all__ = [
    "Interpretation",
    "InterpretationContext",
    "Interpreter",
    "LocalRuleInterpreter",
    "RemoteInterpreter",
    "FallbackInterpreter",
]
