"""File upload endpoint."""

import shutil
from pathlib import Path

from fastapi import APIRouter, Depends, File, UploadFile
from fastapi.responses import PlainTextResponse
from loguru import logger

from src.user_service.api.http.deps import get_storage_config
from src.user_service.runtime.config.config_data import StorageConfig

router = APIRouter(tags=["uploads"])


@router.post("/uploads", response_class=PlainTextResponse)
def store_upload(
    upload_file: UploadFile = File(...),
    storage: StorageConfig = Depends(get_storage_config),
) -> PlainTextResponse:
    """Stream the ``upload_file`` form field into the upload directory.

    The file keeps its original base name and the stored path is returned.
    """
    filename = Path(upload_file.filename or "").name
    if filename in ("", ".."):
        return PlainTextResponse("upload_file has no filename", status_code=400)

    destination = f"{storage.upload_dir}/{filename}"
    try:
        storage.upload_path.mkdir(parents=True, exist_ok=True)
        with open(destination, "wb") as out:
            shutil.copyfileobj(upload_file.file, out)
    except OSError as e:
        logger.exception("Failed to store upload {}", destination)
        return PlainTextResponse(str(e), status_code=500)
    finally:
        upload_file.file.close()

    logger.info("Stored upload {}", destination)
    return PlainTextResponse(destination)
