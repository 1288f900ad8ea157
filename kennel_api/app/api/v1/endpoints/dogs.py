"""
Dog roster endpoints for API v1.

These routes are a thin pass-through to ``DogService``.  Failures are
raised as ``DogError`` subclasses and translated to HTTP responses by
the handlers registered in ``kennel_api.app.exception_handlers``.

``/all`` is declared before ``/{dog_id}`` so it is not captured by the
path parameter.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from kennel_api.app.api.deps import get_dog_service
from kennel_api.app.schemas.dog import DogCreate, DogRead, DogUpdate, MessageResponse
from kennel_api.app.services.dog_service import DogService

router = APIRouter()


@router.get("/", response_model=List[DogRead])
async def list_dogs(
    filter: Optional[str] = Query(None, description="Substring matched against name, breed and supplier"),
    service: DogService = Depends(get_dog_service),
) -> List[DogRead]:
    """Return active dogs, optionally filtered."""
    return await service.list_dogs(filter)


@router.get("/all", response_model=List[DogRead])
async def list_all_dogs(service: DogService = Depends(get_dog_service)) -> List[DogRead]:
    """Return every dog, including soft-deleted records."""
    return await service.list_all_dogs()


@router.get("/{dog_id}", response_model=DogRead)
async def get_dog(dog_id: int, service: DogService = Depends(get_dog_service)) -> DogRead:
    """Retrieve a single dog by ID.  Returns 404 if it does not exist."""
    return await service.get_dog(dog_id)


@router.post("/", response_model=DogRead)
async def create_dog(dog_in: DogCreate, service: DogService = Depends(get_dog_service)) -> DogRead:
    """Create a new dog record and return it as stored."""
    return await service.create_dog(dog_in)


@router.put("/{dog_id}", response_model=DogRead)
async def update_dog(
    dog_id: int,
    dog_in: DogUpdate,
    service: DogService = Depends(get_dog_service),
) -> DogRead:
    """Update the provided fields of a dog record."""
    return await service.update_dog(dog_id, dog_in)


@router.delete("/{dog_id}", response_model=MessageResponse)
async def delete_dog(dog_id: int, service: DogService = Depends(get_dog_service)) -> MessageResponse:
    """Soft-delete a dog record."""
    await service.soft_delete_dog(dog_id)
    return MessageResponse(message=f"Dog with ID {dog_id} has been successfully deleted")
