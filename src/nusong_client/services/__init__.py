"""Backend client and typed resource APIs."""

from nusong_client.services.admin import AdminAPI
from nusong_client.services.albums import AlbumAPI
from nusong_client.services.auth import AuthAPI
from nusong_client.services.band import BandAPI
from nusong_client.services.base import (
    APIError,
    AuthenticationError,
    BaseAPIClient,
    NotFoundError,
    QuotaExceededError,
    RateLimitError,
    TransportError,
    ValidationError,
)
from nusong_client.services.billing import BillingAPI
from nusong_client.services.client import NuSongClient
from nusong_client.services.community import CommunityAPI
from nusong_client.services.interceptors import AuthRedirectInterceptor
from nusong_client.services.playlists import PlaylistAPI
from nusong_client.services.profile import ProfileAPI
from nusong_client.services.tracks import TrackAPI
from nusong_client.services.uploads import UploadAPI

__all__ = [
    "APIError",
    "AuthenticationError",
    "BaseAPIClient",
    "NotFoundError",
    "QuotaExceededError",
    "RateLimitError",
    "TransportError",
    "ValidationError",
    "AuthRedirectInterceptor",
    "NuSongClient",
    "AdminAPI",
    "AlbumAPI",
    "AuthAPI",
    "BandAPI",
    "BillingAPI",
    "CommunityAPI",
    "PlaylistAPI",
    "ProfileAPI",
    "TrackAPI",
    "UploadAPI",
]
