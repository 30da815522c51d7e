from fastapi import APIRouter, Depends, File, UploadFile
from sqlmodel.ext.asyncio.session import AsyncSession

from chatbot_platform.api.deps import get_current_user, get_db, get_file_storage
from chatbot_platform.controllers import file_controller
from chatbot_platform.core.file_storage import FileStorageClient
from chatbot_platform.models.user import User
from chatbot_platform.schemas.base import MessageResponse
from chatbot_platform.schemas.file import ProjectFileEnvelope, ProjectFileList, ProjectFileRead

router = APIRouter(prefix="/files", tags=["files"])


@router.post("/upload/{project_id}", response_model=ProjectFileEnvelope)
async def upload_file(
    project_id: str,
    file: UploadFile | None = File(default=None),
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
    storage: FileStorageClient = Depends(get_file_storage),
):
    """Upload a file to the provider's file storage and attach it to a project."""
    record = await file_controller.upload_file(user, project_id, file, storage, db)
    return ProjectFileEnvelope(file=ProjectFileRead.from_record(record))


@router.get("/{project_id}", response_model=ProjectFileList)
async def list_files(
    project_id: str,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    records = await file_controller.list_files(user, project_id, db)
    return ProjectFileList(files=[ProjectFileRead.from_record(r) for r in records])


@router.delete("/{project_id}/{file_id}", response_model=MessageResponse)
async def delete_file(
    project_id: str,
    file_id: str,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
    storage: FileStorageClient = Depends(get_file_storage),
):
    await file_controller.delete_file(user, project_id, file_id, storage, db)
    return MessageResponse(message="File deleted successfully")
