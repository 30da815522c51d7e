import datetime

from chatbot_platform.models.project import ProjectFile
from chatbot_platform.schemas.base import APIModel


class ProjectFileRead(APIModel):
    id: str
    file_name: str
    uploaded_at: datetime.datetime

    @classmethod
    def from_record(cls, record: ProjectFile) -> "ProjectFileRead":
        # Clients address files by the storage id, not the row id
        return cls(id=record.file_id, file_name=record.file_name, uploaded_at=record.created_at)


class ProjectFileEnvelope(APIModel):
    file: ProjectFileRead


class ProjectFileList(APIModel):
    files: list[ProjectFileRead]
