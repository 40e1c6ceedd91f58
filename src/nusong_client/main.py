"""Application entry point: wires settings, transport, cache and views."""

import logging

import httpx

from nusong_client import __version__
from nusong_client.cache import CURRENT_USER, GENERATION_QUOTA, QueryCache
from nusong_client.config import Settings, get_settings
from nusong_client.schemas.user import User
from nusong_client.services import (
    AdminAPI,
    AlbumAPI,
    APIError,
    AuthAPI,
    AuthRedirectInterceptor,
    BandAPI,
    BillingAPI,
    CommunityAPI,
    NuSongClient,
    PlaylistAPI,
    ProfileAPI,
    TrackAPI,
    UploadAPI,
)
from nusong_client.state import PlanState
from nusong_client.ui import Navigator, Notifier
from nusong_client.views import (
    AdminView,
    AuthView,
    BandView,
    CommunityView,
    GenerationView,
    LibraryView,
    PlaylistView,
    ProfileView,
    PublicView,
)

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


class NuSongApp:
    """One signed-in browser session's worth of client state.

    Use as an async context manager so the HTTP client is closed on exit.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.settings = settings or get_settings()
        if self.settings.debug:
            logging.getLogger("nusong_client").setLevel(logging.DEBUG)

        self.navigator = Navigator()
        self.notifier = Notifier()
        self.cache = QueryCache()
        self.interceptor = AuthRedirectInterceptor(
            self.navigator,
            self.notifier,
            login_path=self.settings.login_path,
            admin_login_path=self.settings.admin_login_path,
            redirect_delay=self.settings.auth_redirect_delay,
        )
        self.client = NuSongClient(
            base_url=self.settings.api_base_url,
            timeout=self.settings.request_timeout,
            interceptors=[self.interceptor],
            transport=transport,
        )

        self.auth = AuthAPI(self.client)
        self.tracks = TrackAPI(self.client)
        self.albums = AlbumAPI(self.client)
        self.playlists = PlaylistAPI(self.client)
        self.band = BandAPI(self.client)
        self.community = CommunityAPI(self.client)
        self.billing = BillingAPI(self.client)
        self.profile = ProfileAPI(self.client)
        self.uploads = UploadAPI(self.client)
        self.admin = AdminAPI(self.client)

    async def __aenter__(self) -> "NuSongApp":
        logger.info("Starting %s v%s", self.settings.app_name, __version__)
        logger.info("Backend: %s", self.settings.api_base_url)

        warnings = self.settings.validate_runtime_config()
        if warnings:
            logger.warning("Configuration warnings:")
            for warning in warnings:
                logger.warning("  - %s", warning)
        else:
            logger.info("Configuration validation passed - no warnings")
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    async def close(self) -> None:
        logger.info("Client shutting down")
        await self.client.close()

    async def current_user(self) -> User | None:
        """The signed-in user, or None for visitors."""
        return await self.cache.fetch(CURRENT_USER, self.auth.current_user)

    async def plan_state(self) -> PlanState:
        """Plan flags for the current user, including the backend quota answer."""
        user = await self.current_user()
        if user is None:
            return PlanState.from_user(None)
        try:
            quota = await self.cache.fetch(GENERATION_QUOTA, self.tracks.generation_quota)
        except APIError as e:
            logger.warning("Generation quota unavailable, using plan status: %s", e)
            quota = None
        return PlanState.from_user(user, quota)

    # Views
    def generation_view(self) -> GenerationView:
        return GenerationView(self)

    def library_view(self) -> LibraryView:
        return LibraryView(self)

    def playlist_view(self) -> PlaylistView:
        return PlaylistView(self)

    def band_view(self) -> BandView:
        return BandView(self)

    def community_view(self) -> CommunityView:
        return CommunityView(self)

    def public_view(self) -> PublicView:
        return PublicView(self)

    def profile_view(self) -> ProfileView:
        return ProfileView(self)

    def admin_view(self) -> AdminView:
        return AdminView(self)

    def auth_view(self) -> AuthView:
        return AuthView(self)
