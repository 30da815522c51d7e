import logging
import uuid

from fastapi import UploadFile
from sqlalchemy import select
from sqlmodel.ext.asyncio.session import AsyncSession

from chatbot_platform.controllers import project_controller
from chatbot_platform.core.config import settings
from chatbot_platform.core.exceptions import AppError, NotFoundError, UpstreamError, ValidationError
from chatbot_platform.core.file_storage import FileStorageClient
from chatbot_platform.models.project import ProjectFile
from chatbot_platform.models.user import User

logger = logging.getLogger(__name__)


async def list_files(user: User, project_id: uuid.UUID | str, db: AsyncSession) -> list[ProjectFile]:
    project = await project_controller.get_project(user, project_id, db)
    result = await db.execute(
        select(ProjectFile)
        .where(ProjectFile.project_id == project.id)
        .order_by(ProjectFile.created_at.asc())
    )
    return list(result.scalars().all())


async def upload_file(
    user: User,
    project_id: uuid.UUID | str,
    upload: UploadFile | None,
    storage: FileStorageClient,
    db: AsyncSession,
) -> ProjectFile:
    """Forward *upload* to the file-storage API and attach it to the project."""
    if upload is None or not upload.filename:
        raise ValidationError("No file uploaded", errors=[{"field": "file", "message": "No file uploaded"}])
    if upload.size is not None and upload.size > settings.MAX_UPLOAD_BYTES:
        raise AppError("File too large", status_code=413)

    project = await project_controller.get_project(user, project_id, db)

    file_id = await storage.upload(upload.filename, upload.file, upload.content_type)

    project_file = ProjectFile(project_id=project.id, file_id=file_id, file_name=upload.filename)
    db.add(project_file)
    await db.flush()
    await db.refresh(project_file)
    logger.info("Attached file %s to project %s", file_id, project.id)
    return project_file


async def delete_file(
    user: User,
    project_id: uuid.UUID | str,
    file_id: str,
    storage: FileStorageClient,
    db: AsyncSession,
) -> None:
    """Detach *file_id* from the project, removing it from storage when possible."""
    project = await project_controller.get_project(user, project_id, db)
    result = await db.execute(
        select(ProjectFile).where(
            ProjectFile.project_id == project.id,
            ProjectFile.file_id == file_id,
        )
    )
    project_file = result.scalars().first()
    if project_file is None:
        raise NotFoundError("File not found in project")

    try:
        await storage.delete(file_id)
    except UpstreamError as e:
        # The local record is removed even if the provider still holds the file
        logger.warning("Could not delete file %s from storage: %s", file_id, e.message)

    await db.delete(project_file)
    await db.flush()
