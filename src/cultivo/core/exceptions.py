"""
Custom exception hierarchy for the cultivo system.
Provides clear error categories and rich error information.
"""
from typing import Optional, Any, Dict
from dataclasses import dataclass


@dataclass
class ErrorContext:
    """Context information for errors"""
    phase_id: Optional[str] = None
    week_index: Optional[int] = None
    date: Optional[str] = None
    component: Optional[str] = None
    details: Optional[Dict[str, Any]] = None


class CultivoError(Exception):
    """Base exception for all cultivo errors"""

    def __init__(self, message: str, context: Optional[ErrorContext] = None):
        super().__init__(message)
        self.message = message
        self.context = context or ErrorContext()

    def __str__(self) -> str:
        context_str = ""
        if self.context.phase_id:
            context_str += f" [Phase: {self.context.phase_id}]"
        if self.context.week_index is not None:
            context_str += f" [Week: {self.context.week_index}]"
        if self.context.date:
            context_str += f" [Date: {self.context.date}]"
        if self.context.component:
            context_str += f" [Component: {self.context.component}]"

        return f"{self.__class__.__name__}: {self.message}{context_str}"


# Configuration errors
class ConfigurationError(CultivoError):
    """Configuration error"""
    pass


class PhaseTableError(ConfigurationError):
    """Phase week ranges have gaps, overlaps or bad ids"""
    pass


class DoseMismatchError(ConfigurationError):
    """Product and dose lists differ in length"""
    pass


class VarietyTableError(ConfigurationError):
    """Duplicate or inconsistent plant entries"""
    pass


class WashWindowError(ConfigurationError):
    """Wash window dates out of order or unknown group"""
    pass


class SeasonRangeError(ConfigurationError):
    """Season start is after season end"""
    pass


# Schedule errors
class ScheduleError(CultivoError):
    """Base class for schedule generation errors"""
    pass


class SeasonIterationError(ScheduleError):
    """Season iteration exceeded its bound"""
    pass


# Data-related errors
class DataError(CultivoError):
    """Base class for data-related errors"""
    pass


class DataSourceError(DataError):
    """Error fetching data from source"""
    pass


class NotificationError(CultivoError):
    """Outbound message could not be handed to its channel"""
    pass


def handle_exception(exc: Exception, context: Optional[ErrorContext] = None) -> CultivoError:
    """
    Wrap generic exceptions in CultivoError hierarchy.
    Useful for catching and categorizing third-party exceptions.
    """
    if isinstance(exc, CultivoError):
        return exc

    # Map common third-party exceptions
    error_map = {
        FileNotFoundError: ConfigurationError,
        ConnectionError: DataSourceError,
        TimeoutError: DataSourceError,
        ValueError: ConfigurationError,
        KeyError: ConfigurationError,
    }

    for exc_type, cultivo_exc_type in error_map.items():
        if isinstance(exc, exc_type):
            return cultivo_exc_type(str(exc), context)

    return CultivoError(str(exc), context)
