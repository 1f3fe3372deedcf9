# Clients subpackage - external service clients
from .openrouter import OpenRouterClient, extract_message_text

__all__ = [
    "OpenRouterClient",
    "extract_message_text",
]
