import os

from fastapi import UploadFile

from mentor4all.core.config import settings


class StorageService:
    """Local-disk object storage served under ``PUBLIC_STORAGE_URL``."""

    @classmethod
    def save_file(cls, file: UploadFile, object_path: str) -> str:
        """
        Writes the upload to ``object_path`` (overwriting) and returns that path.
        """
        full_path = os.path.join(settings.STORAGE_ROOT, object_path)
        os.makedirs(os.path.dirname(full_path), exist_ok=True)

        with open(full_path, "wb") as f:
            f.write(file.file.read())

        return object_path

    @classmethod
    def public_url(cls, object_path: str) -> str:
        return f"{settings.PUBLIC_STORAGE_URL.rstrip('/')}/{object_path}"

    @classmethod
    def save_avatar(cls, user_id, file: UploadFile) -> str:
        ext = file.filename.rsplit(".", 1)[-1].lower() if file.filename and "." in file.filename else "bin"
        object_path = cls.save_file(file, f"avatars/{user_id}/avatar.{ext}")
        return cls.public_url(object_path)
