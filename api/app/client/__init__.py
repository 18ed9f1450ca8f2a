from app.client.api import MediaApiClient, MediaApiError
from app.client.library import MediaLibrary

__all__ = ["MediaApiClient", "MediaApiError", "MediaLibrary"]
