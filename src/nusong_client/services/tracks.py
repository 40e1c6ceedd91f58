"""Music generation and track endpoints."""

from nusong_client.schemas.track import (
    AudioToMusicRequest,
    GenerationStarted,
    LyricsResult,
    TextToMusicRequest,
    Track,
    Visibility,
)
from nusong_client.schemas.user import GenerationQuota
from nusong_client.services.base import BaseAPIClient


class TrackAPI:
    """Start generations, poll them and manage the resulting tracks."""

    def __init__(self, client: BaseAPIClient) -> None:
        self.client = client

    async def generate_text_to_music(self, form: TextToMusicRequest) -> GenerationStarted:
        data = await self.client.post("/api/generate-text-to-music", json=form.to_wire())
        return GenerationStarted.model_validate(data)

    async def generate_audio_to_music(self, form: AudioToMusicRequest) -> GenerationStarted:
        data = await self.client.post("/api/generate-audio-to-music", json=form.to_wire())
        return GenerationStarted.model_validate(data)

    async def generation_status(self, generation_id: str) -> Track:
        data = await self.client.get(f"/api/generation/{generation_id}/status")
        return Track.model_validate(data)

    async def my_generations(self) -> list[Track]:
        data = await self.client.get("/api/my-generations")
        return [Track.model_validate(item) for item in data or []]

    async def set_visibility(
        self, generation_id: str, visibility: Visibility, title: str | None = None
    ) -> Track:
        body: dict[str, str] = {"visibility": visibility.value}
        if title is not None:
            body["title"] = title
        data = await self.client.patch(f"/api/generation/{generation_id}/visibility", json=body)
        return Track.model_validate(data)

    async def set_album(self, generation_id: str, album_id: str | None) -> Track:
        data = await self.client.patch(
            f"/api/generation/{generation_id}/album", json={"albumId": album_id}
        )
        return Track.model_validate(data)

    async def delete(self, generation_id: str) -> None:
        await self.client.delete(f"/api/generation/{generation_id}")

    async def public_track(self, track_id: str) -> Track:
        data = await self.client.get(f"/api/track/{track_id}")
        return Track.model_validate(data)

    async def public_tracks(self) -> list[Track]:
        data = await self.client.get("/api/public-tracks")
        return [Track.model_validate(item) for item in data or []]

    async def generate_lyrics(self, prompt: str) -> LyricsResult:
        data = await self.client.post("/api/generate-lyrics", json={"prompt": prompt})
        return LyricsResult.model_validate(data)

    async def generation_quota(self) -> GenerationQuota:
        data = await self.client.get("/api/user/generation-status")
        return GenerationQuota.model_validate(data)
