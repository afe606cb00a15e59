"""RTW integrity -- review moderation and reputation scoring for company reviews."""

__version__ = "0.1.0"
