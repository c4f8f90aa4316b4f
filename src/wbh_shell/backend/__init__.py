from .base import BaseResourceBackend
from .discord import DiscordWebhookBackend

__all__ = ["BaseResourceBackend", "DiscordWebhookBackend"]
