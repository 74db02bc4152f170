import mimetypes
from pathlib import Path

from printform.processor.models import UploadedFile

_FALLBACK_MEDIA_TYPE = "application/octet-stream"


class FileLoader:
    """Reads local files into UploadedFile values for the upload flow."""

    def load(self, path: Path) -> UploadedFile:
        """Read file bytes and guess the media type from the file name.

        Raises:
            FileNotFoundError: if the file does not exist.
        """
        if not path.is_file():
            raise FileNotFoundError(f"File not found: {path}")
        media_type, _encoding = mimetypes.guess_type(path.name)
        return UploadedFile(
            filename=path.name,
            content=path.read_bytes(),
            media_type=media_type or _FALLBACK_MEDIA_TYPE,
        )
