"""Image Handlers — animal and shelter galleries.

Invariants:
    - Images are metadata only (url + public_id of an already-uploaded file)
    - After every command each gallery holds at most one principal image
    - A gallery that had no principal gets one: the first image of the batch
    - Only admins of the owning shelter can change a gallery

Design Decisions:
    - The batch principal (if any) replaces the current one instead of failing, so
      uploading a better cover photo is a single call
"""

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from seepaw.core.enforce_animals import check_animal_in_shelter, check_shelter_admin
from seepaw.core.enforce_images import (
    check_deletable_image,
    check_image_belongs_to_animal,
    check_not_already_principal,
    check_single_principal,
    enforce_single_principal,
)
from seepaw.core.result import Result, forbidden, not_found
from seepaw.models.image import Image
from seepaw.schemas.image import ImageCreate
from seepaw.services import map_dtos
from seepaw.services.lookups import get_animal, get_shelter
from seepaw.services.messages import (
    AddAnimalImages, AddShelterImages, DeleteAnimalImage,
    SetAnimalPrincipalImage, ListAnimalImages,
)

logger = logging.getLogger(__name__)


def _attach(gallery: list[Image], payloads: tuple[ImageCreate, ...], **owner) -> list[Image]:
    """Append new Image rows to `gallery`, keeping a single principal."""
    created = [
        Image(
            url=p.url,
            public_id=p.public_id,
            description=p.description,
            is_principal=False,
            **owner,
        )
        for p in payloads
    ]
    had_principal = any(img.is_principal for img in gallery)
    gallery.extend(created)

    requested = next(
        (img for img, p in zip(created, payloads) if p.is_principal), None,
    )
    if requested is not None:
        enforce_single_principal(gallery, requested)
    elif not had_principal:
        enforce_single_principal(gallery, created[0])
    return created


class ImageHandlers:

    def __init__(self, db: AsyncSession):
        self.db = db

    async def _admin_animal(self, caller, animal_id):
        """(animal, error) for an animal the caller administers."""
        error = check_shelter_admin(caller)
        if error:
            return None, error
        animal = await get_animal(self.db, animal_id)
        error = check_animal_in_shelter(animal, caller.shelter_id)
        if error:
            return None, error
        return animal, None

    async def add_animal_images(self, command: AddAnimalImages) -> Result:
        error = check_single_principal([p.is_principal for p in command.images])
        if error:
            return error
        animal, error = await self._admin_animal(command.caller, command.animal_id)
        if error:
            return error

        created = _attach(animal.images, command.images, animal_id=animal.id)
        await self.db.commit()
        logger.info(
            f"Added {len(created)} image(s)",
            extra={"animal_id": animal.id, "added": len(created)},
        )
        return Result.success([map_dtos.image_dto(img) for img in created], 201)

    async def add_shelter_images(self, command: AddShelterImages) -> Result:
        if command.caller.shelter_id != command.shelter_id:
            return forbidden("Only administrators of this shelter can add images")
        error = check_single_principal([p.is_principal for p in command.images])
        if error:
            return error
        shelter = await get_shelter(self.db, command.shelter_id)
        if shelter is None:
            return not_found("Shelter not found")

        created = _attach(shelter.images, command.images, shelter_id=shelter.id)
        await self.db.commit()
        logger.info(
            f"Added {len(created)} shelter image(s)",
            extra={"shelter_id": shelter.id, "added": len(created)},
        )
        return Result.success([map_dtos.image_dto(img) for img in created], 201)

    async def delete_animal_image(self, command: DeleteAnimalImage) -> Result:
        animal, error = await self._admin_animal(command.caller, command.animal_id)
        if error:
            return error
        image = await self.db.get(Image, command.image_id)
        if image is None:
            return not_found("Image not found")
        error = (
            check_image_belongs_to_animal(image, animal.id)
            or check_deletable_image(image)
        )
        if error:
            return error

        animal.images.remove(image)
        await self.db.commit()
        logger.info("Image deleted", extra={"animal_id": animal.id})
        return Result.success(None, 204)

    async def set_principal_image(self, command: SetAnimalPrincipalImage) -> Result:
        animal, error = await self._admin_animal(command.caller, command.animal_id)
        if error:
            return error
        image = await self.db.get(Image, command.image_id)
        if image is None:
            return not_found("Image not found")
        error = (
            check_image_belongs_to_animal(image, animal.id)
            or check_not_already_principal(image)
        )
        if error:
            return error

        enforce_single_principal(animal.images, image)
        await self.db.commit()
        return Result.success(map_dtos.image_dto(image))

    async def list_animal_images(self, query: ListAnimalImages) -> Result:
        animal = await get_animal(self.db, query.animal_id)
        if animal is None:
            return not_found("Animal not found")
        result = await self.db.execute(
            select(Image)
            .where(Image.animal_id == animal.id)
            .order_by(Image.is_principal.desc(), Image.created_at),
        )
        return Result.success([map_dtos.image_dto(img) for img in result.scalars().all()])
