"""Community gallery: public tracks with likes and comments."""

from nusong_client.cache import COMMUNITY_TRACKS
from nusong_client.schemas.community import Comment, CommentForm, LikeInfo
from nusong_client.schemas.track import Track
from nusong_client.schemas.user import User
from nusong_client.views.base import BaseView


def track_info_key(track_id: str) -> tuple[str, ...]:
    return ("/api/tracks", track_id, "community-info")


def track_comments_key(track_id: str) -> tuple[str, ...]:
    return ("/api/tracks", track_id, "comments")


class CommunityView(BaseView):
    async def feed(self) -> list[Track]:
        result = await self.perform(
            self.cache.fetch(COMMUNITY_TRACKS, self.app.community.community_tracks),
            "Failed to load community tracks",
        )
        return result or []

    async def comments(self, track_id: str) -> list[Comment]:
        result = await self.perform(
            self.cache.fetch(
                track_comments_key(track_id), lambda: self.app.community.comments(track_id)
            ),
            "Failed to load comments",
        )
        return result or []

    async def toggle_like(self, track: Track) -> LikeInfo | None:
        """Like or unlike a track depending on its current state."""
        if not await self._require_login("like tracks"):
            return None
        call = self.app.community.unlike if track.user_liked else self.app.community.like
        info = await self.perform(call(track.id), "Failed to update like")
        if info is not None:
            self.cache.invalidate(COMMUNITY_TRACKS)
            self.cache.invalidate(track_info_key(track.id))
        return info

    async def add_comment(self, track_id: str, comment: str) -> Comment | None:
        if not await self._require_login("comment"):
            return None
        form = self.validate(CommentForm, comment=comment)
        if form is None:
            return None
        created = await self.perform(
            self.app.community.add_comment(track_id, form), "Failed to post comment"
        )
        if created is not None:
            self._invalidate_track(track_id)
        return created

    async def delete_comment(self, track_id: str, comment: Comment) -> bool:
        """Delete a comment; only its author may do so."""
        user = await self._current_user()
        if user is None or user.id != comment.user_id:
            self.notifier.error("Not allowed", "You can only delete your own comments.")
            return False
        deleted = await self.complete(
            self.app.community.delete_comment(track_id, comment.id), "Failed to delete comment"
        )
        if deleted:
            self._invalidate_track(track_id)
        return deleted

    async def _current_user(self) -> User | None:
        return await self.perform(self.app.current_user(), "Failed to load your account")

    async def _require_login(self, action: str) -> bool:
        if await self._current_user() is not None:
            return True
        self.notifier.error("Sign in required", f"Please sign in to {action}.")
        return False

    def _invalidate_track(self, track_id: str) -> None:
        self.cache.invalidate(track_comments_key(track_id))
        self.cache.invalidate(track_info_key(track_id))
        self.cache.invalidate(COMMUNITY_TRACKS)
