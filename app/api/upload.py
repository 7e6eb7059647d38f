# Image upload relay: forwards admin uploads to the media host

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile, status

from app.dependencies.auth import get_current_user
from app.schemas import UploadResponse
from app.services.media_service import MediaUploader, UploadError, get_media_uploader
from app.utils.logger import setup_logger

logger = setup_logger("api.upload")

router = APIRouter(prefix="/upload", tags=["Uploads"])


@router.post(
    "", response_model=UploadResponse, dependencies=[Depends(get_current_user)]
)
async def upload_image(
    file: UploadFile = File(...),
    uploader: MediaUploader = Depends(get_media_uploader),
):
    """Forward one image to the media host and return its public URL."""
    content = await file.read()
    if not content:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="Uploaded file is empty"
        )

    try:
        result = await uploader.upload(content, filename=file.filename)
    except UploadError as e:
        logger.error(f"Upload of '{file.filename}' failed: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Upload failed"
        ) from e
    finally:
        await file.close()

    return UploadResponse(url=result["url"], public_id=result.get("public_id"))
