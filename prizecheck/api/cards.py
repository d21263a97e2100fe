"""
Card API endpoint.

Looks up card art for display next to hands and prizes.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel

from prizecheck.services.card_images import CardImageLookup, get_card_image_lookup

router = APIRouter(prefix="/cards", tags=["cards"])


class CardImageResponse(BaseModel):
    """Image lookup result. found is False when no image is available."""

    query: str
    found: bool
    id: str | None = None
    name: str | None = None
    small: str | None = None
    large: str | None = None


@router.get("/image", response_model=CardImageResponse)
async def get_card_image(
    lookup: Annotated[CardImageLookup, Depends(get_card_image_lookup)],
    name: Annotated[str, Query(min_length=1, max_length=200)],
) -> CardImageResponse:
    """
    Find an image for a card.

    Set codes and collector numbers in the name are ignored for the search.
    """
    image = await lookup.lookup(name)
    if image is None:
        return CardImageResponse(query=name, found=False)

    return CardImageResponse(
        query=name,
        found=True,
        id=image.id,
        name=image.name,
        small=image.small,
        large=image.large,
    )
