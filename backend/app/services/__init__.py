from app.services.file_storage import NoticeFileStorage, StoredFile, file_storage

__all__ = [
    "NoticeFileStorage",
    "StoredFile",
    "file_storage",
]
