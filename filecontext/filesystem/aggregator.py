"""
Filesystem access for context aggregation and the storage area.

FileSystemTools turns a sanitized path into FileRecords. A directory is read
one level deep (immediate children only); a single file yields one record.
Files are decoded as UTF-8 regardless of their extension; which records make
it into the prompt is decided later by the context builder.

OS errors are translated into the application's error types so callers can
tell a missing path from an unreadable one.
"""
import os
import stat
from contextlib import contextmanager
from typing import Iterator, List

from filecontext.core.exceptions import FilePermissionError, NotFoundError, ReadError
from filecontext.core.logging_config import LoggerMixin
from filecontext.models.file_record import FileKind, FileRecord


@contextmanager
def translate_os_errors(path: str) -> Iterator[None]:
    """Re-raise OSError subclasses as NotFoundError / FilePermissionError / ReadError."""
    try:
        yield
    except FileNotFoundError as e:
        raise NotFoundError(path) from e
    except PermissionError as e:
        raise FilePermissionError(path) from e
    except OSError as e:
        raise ReadError(path, e.strerror or str(e)) from e


class FileSystemTools(LoggerMixin):
    """
    Read-side filesystem operations used by the query pipeline.

    Stateless; one instance can serve any number of concurrent requests.

    Example:
        >>> tools = FileSystemTools()
        >>> records = tools.get_context_from_path("/srv/app/storage")
        >>> [r.name for r in records if r.content is not None]
        ['example.ts', 'notes.md']
    """

    def read_directory(self, dir_path: str, include_content: bool = False) -> List[FileRecord]:
        """
        List the immediate children of a directory.

        Args:
            dir_path: Directory to list
            include_content: Read the text of every child file

        Returns:
            One FileRecord per child, sorted by name

        Raises:
            NotFoundError, FilePermissionError, ReadError
        """
        with translate_os_errors(dir_path):
            with os.scandir(dir_path) as it:
                entries = sorted(it, key=lambda entry: entry.name)

        records = []
        for entry in entries:
            full_path = os.path.join(dir_path, entry.name)

            # is_dir()/is_file() follow symlinks and return False on errors
            if entry.is_dir():
                records.append(FileRecord(
                    name=entry.name,
                    path=full_path,
                    kind=FileKind.DIRECTORY,
                ))
            elif include_content and entry.is_file():
                records.append(self.read_file(full_path))
            else:
                # FIFOs, sockets, devices and dangling links are listed, never opened
                if include_content:
                    self.logger.debug(f"Skipping content of non-regular entry {full_path}")
                records.append(FileRecord(
                    name=entry.name,
                    path=full_path,
                    kind=FileKind.FILE,
                ))

        self.logger.debug(f"Listed {len(records)} entries in {dir_path}")
        return records

    def read_file(self, file_path: str) -> FileRecord:
        """
        Read a single file as UTF-8 text.

        Undecodable bytes are replaced rather than failing the read, so a
        binary file next to text files does not abort a directory query.

        Raises:
            NotFoundError, FilePermissionError, ReadError
        """
        with translate_os_errors(file_path):
            with open(file_path, "r", encoding="utf-8", errors="replace") as f:
                content = f.read()

        return FileRecord(
            name=os.path.basename(file_path),
            path=file_path,
            kind=FileKind.FILE,
            content=content,
        )

    def get_context_from_path(self, target_path: str) -> List[FileRecord]:
        """
        Aggregate the content found at `target_path`.

        A directory yields one record per immediate child, with content for
        regular files and none for subdirectories or special entries (FIFOs,
        sockets, dangling links). A regular file yields a single record.

        Raises:
            NotFoundError: If the path does not exist
            FilePermissionError: If the path or a child cannot be read
            ReadError: If the target is a special file, or any other I/O failure
        """
        with translate_os_errors(target_path):
            mode = os.stat(target_path).st_mode

        is_dir = stat.S_ISDIR(mode)
        if not is_dir and not stat.S_ISREG(mode):
            # Opening a FIFO with no writer would block forever
            raise ReadError(target_path, "not a regular file or directory")

        if is_dir:
            records = self.read_directory(target_path, include_content=True)
        else:
            records = [self.read_file(target_path)]

        self.logger.info(
            f"Aggregated {len(records)} record(s) from {target_path}"
        )
        return records

    def write_file(self, file_path: str, data: bytes) -> None:
        """
        Write bytes to `file_path`, creating its parent directory.

        Raises:
            FilePermissionError: If the location is not writable
            ReadError: For any other I/O failure
        """
        with translate_os_errors(file_path):
            os.makedirs(os.path.dirname(file_path) or os.curdir, exist_ok=True)
            with open(file_path, "wb") as f:
                f.write(data)

        self.logger.info(f"Wrote {len(data)} bytes to {file_path}")

    def delete_file(self, file_path: str) -> None:
        """
        Delete a regular file.

        Raises:
            NotFoundError: If the file does not exist
            FilePermissionError: If it cannot be removed
            ReadError: For any other failure (including directories)
        """
        with translate_os_errors(file_path):
            os.remove(file_path)

        self.logger.info(f"Deleted {file_path}")
