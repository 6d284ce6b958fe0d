#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Hard75 Tracker - Custom Exception Hierarchy
Structured error handling for all tracker services
"""

# ============================================================================
# BASE EXCEPTIONS
# ============================================================================

class TrackerBaseException(Exception):
    """
    Base exception for all Hard75 Tracker errors.

    All custom exceptions inherit from this to allow catching all tracker-specific errors.
    Includes structured error data support.
    """
    def __init__(self, message: str, error_code: str = None, details: dict = None):
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self):
        """Convert exception to structured dictionary for logging."""
        return {
            'error': self.__class__.__name__,
            'error_code': self.error_code,
            'message': self.message,
            'details': self.details
        }


# ============================================================================
# CONFIGURATION EXCEPTIONS
# ============================================================================

class ConfigServiceError(TrackerBaseException):
    """Base exception for all configuration service errors."""

class MissingConfigError(ConfigServiceError):
    """Raised when a required channel or identifier is not configured."""

class InvalidConfigValueError(ConfigServiceError):
    """Raised when a configured value cannot be converted to its expected type."""


# ============================================================================
# TRACKING EXCEPTIONS
# ============================================================================

class TrackingError(TrackerBaseException):
    """Base exception for progress tracking errors."""

class ResourceSkip(TrackingError):
    """Raised when an external thread cannot contribute to the tracked state."""

class ThreadNameParseError(ResourceSkip):
    """Raised when a thread name matches neither the canonical nor the legacy encoding."""

class DayOutOfRangeError(ResourceSkip):
    """Raised when a thread refers to a day outside the challenge or in the future."""


# ============================================================================
# DISCORD BOT EXCEPTIONS
# ============================================================================

class BotServiceError(TrackerBaseException):
    """Base exception for all bot service errors."""

class GatewayError(BotServiceError):
    """Raised when a Discord channel, guild or thread cannot be reached."""

class DeliveryError(BotServiceError):
    """Raised when a direct message cannot be delivered."""

class RenderError(BotServiceError):
    """Raised when a panel message can neither be edited nor re-sent."""


# ============================================================================
# ENTRY EXCEPTIONS
# ============================================================================

class EntryServiceError(TrackerBaseException):
    """Base exception for daily entry errors."""

class SubmissionRejectedError(EntryServiceError):
    """Raised when a reply does not satisfy the requirement it answers."""


# ============================================================================
# REMINDER EXCEPTIONS
# ============================================================================

class ReminderServiceError(TrackerBaseException):
    """Base exception for reminder errors."""

class InvalidReminderTimeError(ReminderServiceError):
    """Raised when a reminder time is not a valid HH:MM 24-hour value."""
