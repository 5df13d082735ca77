"""Moderation of reviews and complaints."""

from manager_portal.moderation.service import ModerationService, ModerationTarget

__all__ = ["ModerationService", "ModerationTarget"]
