"""
Application services module.
"""

from docqa.application.services.setup_service import SetupService

__all__ = ["SetupService"]
