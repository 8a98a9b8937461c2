"""Image Enforcement — principal-image rules for animal and shelter galleries.

Invariants:
    - check_* functions are PURE: no IO, no async, no DB
    - enforce_single_principal mutates only the image objects it is given
    - At most one principal image per owner at any time
    - The principal image is replaced, never deleted
"""

from seepaw.core.result import Result, bad_request, forbidden


def check_single_principal(principal_flags: list[bool]) -> Result | None:
    if not principal_flags:
        return bad_request("At least one image is required")
    if sum(1 for flag in principal_flags if flag) > 1:
        return bad_request("Only one image can be marked as principal")
    return None


def check_image_belongs_to_animal(image, animal_id) -> Result | None:
    if image.animal_id != animal_id:
        return forbidden("Image does not belong to this animal")
    return None


def check_deletable_image(image) -> Result | None:
    if image.is_principal:
        return bad_request(
            "Cannot delete the principal image. Set another image as principal first",
        )
    return None


def check_not_already_principal(image) -> Result | None:
    if image.is_principal:
        return bad_request("Image is already the principal image")
    return None


def enforce_single_principal(images, new_principal) -> None:
    """Clear the flag on every image, then set it on `new_principal`."""
    for img in images:
        img.is_principal = False
    new_principal.is_principal = True
