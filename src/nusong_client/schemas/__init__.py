"""Pydantic schemas for backend payloads and client-side forms."""

from nusong_client.schemas.admin import (
    AdminLogin,
    AdminUser,
    DashboardStats,
    DatabaseStats,
    DatabaseTable,
    ManagedUser,
    SiteSetting,
    TablePage,
    UserUpdate,
)
from nusong_client.schemas.album import Album, AlbumForm, PublicAlbum, ShareLink
from nusong_client.schemas.band import (
    Band,
    BandForm,
    BandMember,
    BandMemberForm,
    ImageJobStarted,
    ImageJobState,
    ImageJobStatus,
)
from nusong_client.schemas.base import APIModel
from nusong_client.schemas.community import (
    Comment,
    CommentForm,
    CommunityInfo,
    LikeInfo,
    PublicProfile,
)
from nusong_client.schemas.plan import (
    BillingInterval,
    PlanForm,
    RedirectSession,
    SubscriptionPlan,
)
from nusong_client.schemas.playlist import Playlist, PlaylistForm, PlaylistTrack
from nusong_client.schemas.track import (
    AudioToMusicRequest,
    GenerationStarted,
    LyricsResult,
    TextToMusicRequest,
    Track,
    TrackOwner,
    TrackStatus,
    TrackType,
    Visibility,
)
from nusong_client.schemas.upload import NormalizedPath, UploadTarget
from nusong_client.schemas.user import (
    GenerationQuota,
    LoginForm,
    PasswordChange,
    PlanStatus,
    RegisterForm,
    User,
)

__all__ = [
    "APIModel",
    # Users
    "User",
    "PlanStatus",
    "GenerationQuota",
    "LoginForm",
    "RegisterForm",
    "PasswordChange",
    # Tracks
    "Track",
    "TrackOwner",
    "TrackStatus",
    "TrackType",
    "Visibility",
    "TextToMusicRequest",
    "AudioToMusicRequest",
    "GenerationStarted",
    "LyricsResult",
    # Albums
    "Album",
    "AlbumForm",
    "ShareLink",
    "PublicAlbum",
    # Playlists
    "Playlist",
    "PlaylistForm",
    "PlaylistTrack",
    # Bands
    "Band",
    "BandForm",
    "BandMember",
    "BandMemberForm",
    "ImageJobStarted",
    "ImageJobState",
    "ImageJobStatus",
    # Community
    "Comment",
    "CommentForm",
    "CommunityInfo",
    "LikeInfo",
    "PublicProfile",
    # Plans
    "SubscriptionPlan",
    "PlanForm",
    "BillingInterval",
    "RedirectSession",
    # Uploads
    "UploadTarget",
    "NormalizedPath",
    # Admin
    "AdminUser",
    "AdminLogin",
    "DashboardStats",
    "ManagedUser",
    "UserUpdate",
    "DatabaseStats",
    "DatabaseTable",
    "TablePage",
    "SiteSetting",
]
