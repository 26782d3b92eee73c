"""
Image endpoint - serve stored image files by name.
"""

from fastapi import APIRouter, HTTPException, Request, status
from fastapi.responses import FileResponse

from catalog.core.dependencies import ImageStoreDep
from catalog.core.exceptions import ImageNotFound, InvalidInput

router = APIRouter()


@router.get("/{image_name}")
async def get_image(request: Request, images: ImageStoreDep, image_name: str):
    """Return the image, or the configured default image when it does not exist."""
    try:
        return FileResponse(images.path(image_name))
    except InvalidInput as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))
    except ImageNotFound:
        default_image = request.app.state.settings.default_image
        if default_image:
            try:
                return FileResponse(images.path(default_image))
            except (ImageNotFound, InvalidInput):
                pass
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Image not found")
