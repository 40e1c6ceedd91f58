"""Band, band member and portrait endpoints."""

from nusong_client.schemas.band import (
    Band,
    BandForm,
    BandMember,
    BandMemberForm,
    ImageJobStarted,
    ImageJobStatus,
)
from nusong_client.services.base import BaseAPIClient, NotFoundError


class BandAPI:
    """The user's band (at most one) and its four member slots."""

    def __init__(self, client: BaseAPIClient) -> None:
        self.client = client

    async def get_band(self) -> Band | None:
        try:
            data = await self.client.get("/api/band")
        except NotFoundError:
            return None
        return Band.model_validate(data) if data else None

    async def create_band(self, form: BandForm) -> Band:
        data = await self.client.post("/api/band", json=form.to_wire())
        return Band.model_validate(data)

    async def add_member(self, form: BandMemberForm) -> BandMember:
        data = await self.client.post("/api/band/members", json=form.to_wire())
        return BandMember.model_validate(data)

    async def update_member(self, member_id: str, form: BandMemberForm) -> BandMember:
        data = await self.client.put(f"/api/band/members/{member_id}", json=form.to_wire())
        return BandMember.model_validate(data)

    async def delete_member(self, member_id: str) -> None:
        await self.client.delete(f"/api/band/members/{member_id}")

    async def generate_member_image(self, description: str) -> ImageJobStarted:
        data = await self.client.post(
            "/api/band/members/generate-image", json={"description": description}
        )
        return ImageJobStarted.model_validate(data)

    async def member_image_status(self, request_id: str) -> ImageJobStatus:
        data = await self.client.get(f"/api/band/members/image-status/{request_id}")
        return ImageJobStatus.model_validate(data)

    async def save_member_image(self, member_id: str, image_url: str) -> BandMember:
        data = await self.client.post(
            f"/api/band/members/{member_id}/save-image", json={"imageUrl": image_url}
        )
        return BandMember.model_validate(data)

    async def generate_band_picture(self, prompt: str) -> ImageJobStarted:
        data = await self.client.post("/api/band/generate-picture", json={"prompt": prompt})
        return ImageJobStarted.model_validate(data)

    async def band_picture_status(self, request_id: str) -> ImageJobStatus:
        data = await self.client.get(f"/api/band/picture-status/{request_id}")
        return ImageJobStatus.model_validate(data)
