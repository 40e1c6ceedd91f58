"""Page-level view models."""

from nusong_client.views.admin import AdminView
from nusong_client.views.auth import AuthView
from nusong_client.views.band import BandView
from nusong_client.views.base import BaseView
from nusong_client.views.community import CommunityView
from nusong_client.views.generate import GenerationView, Phase
from nusong_client.views.library import LibraryView
from nusong_client.views.playlists import PlaylistView
from nusong_client.views.profile import ProfileView
from nusong_client.views.public import PublicView

__all__ = [
    "AdminView",
    "AuthView",
    "BandView",
    "BaseView",
    "CommunityView",
    "GenerationView",
    "LibraryView",
    "Phase",
    "PlaylistView",
    "ProfileView",
    "PublicView",
]
