"""Community feed, likes, comments and public profiles."""

from nusong_client.schemas.community import (
    Comment,
    CommentForm,
    CommunityInfo,
    LikeInfo,
    PublicProfile,
)
from nusong_client.schemas.track import Track
from nusong_client.services.base import BaseAPIClient


class CommunityAPI:
    def __init__(self, client: BaseAPIClient) -> None:
        self.client = client

    async def community_tracks(self) -> list[Track]:
        data = await self.client.get("/api/community/tracks")
        return [Track.model_validate(item) for item in data or []]

    async def like(self, track_id: str) -> LikeInfo:
        data = await self.client.post(f"/api/tracks/{track_id}/like")
        return LikeInfo.model_validate(data or {"likeCount": 0, "userLiked": True})

    async def unlike(self, track_id: str) -> LikeInfo:
        data = await self.client.delete(f"/api/tracks/{track_id}/like")
        return LikeInfo.model_validate(data or {"likeCount": 0, "userLiked": False})

    async def likes(self, track_id: str) -> LikeInfo:
        data = await self.client.get(f"/api/tracks/{track_id}/likes")
        return LikeInfo.model_validate(data)

    async def comments(self, track_id: str) -> list[Comment]:
        data = await self.client.get(f"/api/tracks/{track_id}/comments")
        return [Comment.model_validate(item) for item in data or []]

    async def add_comment(self, track_id: str, form: CommentForm) -> Comment:
        data = await self.client.post(f"/api/tracks/{track_id}/comments", json=form.to_wire())
        return Comment.model_validate(data)

    async def delete_comment(self, track_id: str, comment_id: str) -> None:
        await self.client.delete(f"/api/tracks/{track_id}/comments/{comment_id}")

    async def community_info(self, track_id: str) -> CommunityInfo:
        data = await self.client.get(f"/api/tracks/{track_id}/community-info")
        return CommunityInfo.model_validate(data)

    async def public_profile(self, username: str) -> PublicProfile:
        data = await self.client.get(f"/api/profile/{username}")
        return PublicProfile.model_validate(data)
