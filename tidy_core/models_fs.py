"""
models_fs.py - File Descriptor Definitions

Contains:
- FileCategory: File category derived from the extension
- FileDescriptor: Immutable snapshot of a scanned file
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional
import os


class FileCategory(Enum):
    """File category enumeration"""
    IMAGE = "image"
    DOCUMENT = "document"
    VIDEO = "video"
    AUDIO = "audio"
    ARCHIVE = "archive"
    CODE = "code"
    DATA = "data"
    OTHER = "other"

    @property
    def label(self) -> str:
        """Folder label used by the {category} placeholder"""
        return _CATEGORY_LABELS[self]


_CATEGORY_LABELS = {
    FileCategory.IMAGE: "Images",
    FileCategory.DOCUMENT: "Documents",
    FileCategory.VIDEO: "Videos",
    FileCategory.AUDIO: "Audio",
    FileCategory.ARCHIVE: "Archives",
    FileCategory.CODE: "Code",
    FileCategory.DATA: "Data",
    FileCategory.OTHER: "Other",
}

_EXTENSION_CATEGORIES = {
    FileCategory.IMAGE: (
        "jpg", "jpeg", "png", "gif", "bmp", "webp", "svg", "ico", "tiff", "tif",
        "heic", "heif", "raw", "cr2", "nef", "arw", "dng",
    ),
    FileCategory.DOCUMENT: (
        "pdf", "doc", "docx", "xls", "xlsx", "ppt", "pptx", "odt", "ods", "odp",
        "txt", "rtf", "md", "csv",
    ),
    FileCategory.VIDEO: (
        "mp4", "avi", "mkv", "mov", "wmv", "flv", "webm", "m4v", "mpeg", "mpg",
    ),
    FileCategory.AUDIO: ("mp3", "wav", "flac", "aac", "ogg", "wma", "m4a", "opus"),
    FileCategory.ARCHIVE: ("zip", "tar", "gz", "bz2", "xz", "7z", "rar", "iso"),
    FileCategory.CODE: (
        "js", "ts", "jsx", "tsx", "py", "rs", "go", "java", "c", "cpp", "h", "hpp",
        "cs", "rb", "php", "swift", "kt", "scala", "html", "css", "scss", "less",
        "json", "yaml", "yml", "xml", "toml", "sql", "sh", "bash", "ps1",
    ),
    FileCategory.DATA: ("db", "sqlite", "mdb", "accdb"),
}

_CATEGORY_BY_EXTENSION = {
    ext: category
    for category, extensions in _EXTENSION_CATEGORIES.items()
    for ext in extensions
}


def category_for_extension(ext: str) -> FileCategory:
    """Get file category for an extension (with or without leading dot)"""
    return _CATEGORY_BY_EXTENSION.get(ext.lstrip(".").lower(), FileCategory.OTHER)


def parse_timestamp(value: Any) -> datetime:
    """Parse an ISO-8601 string (``Z`` suffix allowed) or a datetime into UTC"""
    if isinstance(value, datetime):
        dt = value
    else:
        text = str(value)
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        dt = datetime.fromisoformat(text)
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def format_timestamp(dt: datetime) -> str:
    """Format a UTC datetime the way the wire format expects"""
    return dt.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")


@dataclass(frozen=True)
class FileDescriptor:
    """File information snapshot taken at scan time"""
    path: str                       # Full absolute path
    name: str                       # Filename (without extension)
    extension: str                  # Extension without dot (e.g., jpg)
    full_name: str                  # Filename (with extension)
    size: int                       # File size (bytes)
    created_at: datetime            # Creation time (UTC)
    modified_at: datetime           # Modification time (UTC)
    relative_path: str = ""         # Path relative to scan root
    category: FileCategory = FileCategory.OTHER

    @classmethod
    def from_path(cls, p: Path, root: Optional[Path] = None) -> "FileDescriptor":
        """Create FileDescriptor from Path object"""
        p = Path(p)
        stat = p.stat()
        suffix = p.suffix
        extension = suffix[1:] if suffix else ""
        # Dotfiles such as .gitignore have no extension
        stem = p.stem if extension else p.name

        if root is not None:
            try:
                relative = str(p.relative_to(root))
            except ValueError:
                relative = p.name
        else:
            relative = p.name

        # st_birthtime only exists on some platforms
        created = getattr(stat, "st_birthtime", stat.st_ctime)

        return cls(
            path=str(p),
            name=stem,
            extension=extension,
            full_name=p.name,
            size=stat.st_size,
            created_at=datetime.fromtimestamp(created, tz=timezone.utc),
            modified_at=datetime.fromtimestamp(stat.st_mtime, tz=timezone.utc),
            relative_path=relative,
            category=category_for_extension(extension),
        )

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "FileDescriptor":
        """Create FileDescriptor from its camelCase wire form"""
        name = data["name"]
        extension = data.get("extension", "")
        full_name = data.get("fullName") or (f"{name}.{extension}" if extension else name)
        modified = parse_timestamp(data["modifiedAt"])
        created = parse_timestamp(data["createdAt"]) if data.get("createdAt") else modified
        category = data.get("category")
        return cls(
            path=data["path"],
            name=name,
            extension=extension,
            full_name=full_name,
            size=int(data.get("size", 0)),
            created_at=created,
            modified_at=modified,
            relative_path=data.get("relativePath", full_name),
            category=FileCategory(category) if category else category_for_extension(extension),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "path": self.path,
            "name": self.name,
            "extension": self.extension,
            "fullName": self.full_name,
            "size": self.size,
            "createdAt": format_timestamp(self.created_at),
            "modifiedAt": format_timestamp(self.modified_at),
            "relativePath": self.relative_path,
            "category": self.category.value,
        }

    @property
    def source_dir(self) -> str:
        """Directory containing the file ('' for a bare filename)"""
        return os.path.dirname(self.path)


def normalize_for_comparison(name: str, case_insensitive: bool = True) -> str:
    """Normalize filename for comparison"""
    if case_insensitive:
        return name.casefold()
    return name
