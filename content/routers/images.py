from typing import List
from fastapi import APIRouter, Depends, File, UploadFile

from app.core.auth import get_current_user
from content.adapters.outbound.storage_s3 import S3StorageAdapter
from content.domain.entities.image import ImageDeleteIn, ImageDeleteOut, ImageUploadOut
from content.ports.outbound.storage_port import StoragePort
from content.services.image_service import ImageFile, ImageService

router = APIRouter(
    prefix="/v1/contents",
    tags=["images"],
    dependencies=[Depends(get_current_user)],
)

def get_storage() -> StoragePort:
    return S3StorageAdapter()

def get_service(storage: StoragePort = Depends(get_storage)) -> ImageService:
    return ImageService(storage)


@router.post(
    "/image",
    summary="Upload images",
    description="Stores up to 5 images (multipart field `upload`) and returns their public URLs in upload order.",
    response_model=ImageUploadOut,
    responses={
        400: {"description": "More files than allowed in one call."},
        401: {"description": "Not authenticated."},
        502: {"description": "Object storage failed."},
        504: {"description": "Object storage timed out."},
    },
)
async def upload_images(
    upload: List[UploadFile] = File(..., description="Image files"),
    svc: ImageService = Depends(get_service),
):
    files = [ImageFile(filename=f.filename or "", data=await f.read(), content_type=f.content_type) for f in upload]
    urls = await svc.upload(files)
    return ImageUploadOut(url=urls)


@router.post(
    "/deleteimg",
    summary="Delete a stored image",
    description="Removes one stored object by key.",
    response_model=ImageDeleteOut,
    responses={
        401: {"description": "Not authenticated."},
        502: {"description": "Object storage failed."},
    },
)
async def delete_image(payload: ImageDeleteIn, svc: ImageService = Depends(get_service)):
    return ImageDeleteOut(deleted=await svc.delete(payload.key))
