"""
Custom exception classes for the thingmeta library.

Value objects (channel types, channel definitions, thing types) report invalid
arguments through pydantic's ``ValidationError``; the classes here cover the
loading layer that assembles those objects from definition documents.
"""

import logging
from enum import Enum
from typing import Any, Dict, Optional


class ThingMetaException(Exception):
    """Base exception class for all thingmeta exceptions."""

    pass


class DefinitionLoadError(ThingMetaException):
    """
    Raised when a definitions document cannot be turned into thing types.

    Carries the reason and a details dict naming where in the document the
    failure happened.

    Example:
        >>> raise DefinitionLoadError(
        ...     reason="Invalid channel definition",
        ...     details={"thing_type": "hue:lamp", "channel": ""}
        ... )
    """

    def __init__(self, reason: str, details: dict = None):
        self.reason = reason
        self.details = details or {}
        message = f"{reason}"
        if self.details:
            message += f" - {self.details}"
        super().__init__(message)


class UnresolvedChannelTypeError(DefinitionLoadError):
    """Raised when a channel references a channel type uid that is not registered."""

    pass


class UnresolvedTypePolicy(Enum):
    """Policy for channels whose type uid cannot be resolved."""

    FAIL = "fail"              # Raise UnresolvedChannelTypeError (default)
    WARN = "warn"              # Log warning and skip the channel
    IGNORE = "ignore"          # Skip the channel silently


class UnresolvedTypeHandler:
    """
    Handles unresolved channel type references based on configured policy.

    Usage:
        >>> handler = UnresolvedTypeHandler(policy=UnresolvedTypePolicy.FAIL, logger=logger)
        >>> handler.handle(reason="Unknown channel type", details={"type": "hue:color"})
        # Raises UnresolvedChannelTypeError

        >>> handler = UnresolvedTypeHandler(policy=UnresolvedTypePolicy.WARN, logger=logger)
        >>> handler.handle(reason="Unknown channel type", details={"type": "hue:color"})
        # Logs warning; the caller skips the channel
    """

    def __init__(self, policy: UnresolvedTypePolicy, logger: logging.Logger):
        """
        Initialize the handler.

        Args:
            policy: How to handle unresolved types (FAIL, WARN, IGNORE)
            logger: Logger used by the WARN policy
        """
        self.policy = policy
        self.logger = logger

    def handle(self, reason: str, details: Optional[Dict[str, Any]] = None) -> None:
        """
        Handle an unresolved channel type based on policy.

        Returning normally means the channel is skipped.

        Args:
            reason: Human-readable reason
            details: Where the reference was found

        Raises:
            UnresolvedChannelTypeError: If policy is FAIL
        """
        details = details or {}

        if self.policy == UnresolvedTypePolicy.FAIL:
            raise UnresolvedChannelTypeError(reason=reason, details=details)

        elif self.policy == UnresolvedTypePolicy.WARN:
            self.logger.warning(f"{reason}: {details}")
