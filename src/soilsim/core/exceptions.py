"""
Custom exception hierarchy for the soilsim solvers.
Provides clear error categories and rich error information.
"""
from typing import Optional, Any, Dict
from dataclasses import dataclass


@dataclass
class ErrorContext:
    """Context information for errors"""
    component: Optional[str] = None
    operation: Optional[str] = None
    parameter: Optional[str] = None
    details: Optional[Dict[str, Any]] = None


class SoilSimError(Exception):
    """Base exception for all soilsim errors"""

    def __init__(self, message: str, context: Optional[ErrorContext] = None):
        super().__init__(message)
        self.message = message
        self.context = context or ErrorContext()

    def __str__(self) -> str:
        context_str = ""
        if self.context.component:
            context_str += f" [Component: {self.context.component}]"
        if self.context.operation:
            context_str += f" [Operation: {self.context.operation}]"
        if self.context.parameter:
            context_str += f" [Parameter: {self.context.parameter}]"

        return f"{self.__class__.__name__}: {self.message}{context_str}"


# Physics model errors
class PhysicsModelError(SoilSimError):
    """Base class for physics model errors"""
    pass


class ParameterError(PhysicsModelError):
    """Invalid model parameters"""
    pass


class ConvergenceError(PhysicsModelError):
    """Model failed to converge"""
    pass


# Configuration errors
class ConfigurationError(SoilSimError):
    """Configuration error"""
    pass
