"""Extraction of selected files from possibly compressed tar archives."""

from __future__ import annotations

import bz2
import gzip
import io
import lzma
import tarfile
import zlib
from collections.abc import Iterable
from typing import BinaryIO

MAX_EXTRACTABLE_FILE_SIZE = 200 * 1024 * 1024

_SNIFF_LEN = 6
_GZIP_HEADER = b"\x1f\x8b"
_BZIP2_HEADER = b"\x42\x5a\x68"
_XZ_HEADER = b"\xfd\x37\x7a\x58\x5a\x00"

_READ_ERRORS = (tarfile.TarError, OSError, EOFError, zlib.error, lzma.LZMAError)


class CouldNotExtractError(Exception):
    """Raised when an archive cannot be read."""

    def __init__(self, message: str = "tarutil: could not extract the archive") -> None:
        super().__init__(message)


class ExtractedFileTooBigError(Exception):
    """Raised when a file selected for extraction exceeds the size limit."""

    def __init__(
        self,
        message: str = (
            "tarutil: could not extract one or more files from the archive: "
            "file too big"
        ),
    ) -> None:
        super().__init__(message)


class _PrefixedReader(io.RawIOBase):
    """Replays already-read bytes before continuing with the wrapped stream."""

    def __init__(self, prefix: bytes, raw: BinaryIO) -> None:
        super().__init__()
        self._prefix = prefix
        self._raw = raw

    def readable(self) -> bool:
        return True

    def readinto(self, buffer) -> int:
        size = len(buffer)
        if self._prefix:
            chunk, self._prefix = self._prefix[:size], self._prefix[size:]
        else:
            chunk = self._raw.read(size) or b""
        buffer[: len(chunk)] = chunk
        return len(chunk)


def _sniff(fileobj: BinaryIO) -> tuple[bytes, _PrefixedReader]:
    head = b""
    while len(head) < _SNIFF_LEN:
        chunk = fileobj.read(_SNIFF_LEN - len(head))
        if not chunk:
            break
        head += chunk
    return head, _PrefixedReader(head, fileobj)


def _decompressed(head: bytes, stream: _PrefixedReader):
    if len(head) == _SNIFF_LEN:
        if head.startswith(_GZIP_HEADER):
            return gzip.GzipFile(fileobj=stream, mode="rb")
        if head.startswith(_BZIP2_HEADER):
            return bz2.BZ2File(stream)
        if head.startswith(_XZ_HEADER):
            return lzma.LZMAFile(stream)
    return stream


def _open_stream(head: bytes, stream: _PrefixedReader) -> tarfile.TarFile:
    try:
        return tarfile.open(fileobj=_decompressed(head, stream), mode="r|")
    except _READ_ERRORS as exc:
        raise CouldNotExtractError() from exc


def open_tar(fileobj: BinaryIO) -> tarfile.TarFile:
    """Open a tar stream, detecting gzip, bzip2 or xz compression by magic bytes.

    The caller is responsible for closing the returned archive.
    """
    head, stream = _sniff(fileobj)
    return _open_stream(head, stream)


def extract_files(
    fileobj: BinaryIO,
    filenames: Iterable[str],
    max_file_size: int = MAX_EXTRACTABLE_FILE_SIZE,
) -> dict[str, bytes]:
    """Return the contents of archive members whose path starts with a given prefix."""
    prefixes = tuple(filenames)
    head, stream = _sniff(fileobj)
    if not head:
        return {}

    files: dict[str, bytes] = {}
    with _open_stream(head, stream) as tar:
        try:
            for member in tar:
                name = member.name.removeprefix("./")
                if not name.startswith(prefixes):
                    continue
                if member.size > max_file_size:
                    raise ExtractedFileTooBigError()
                if member.issym() or member.islnk():
                    files[name] = b""
                elif member.isreg():
                    extracted = tar.extractfile(member)
                    files[name] = extracted.read() if extracted is not None else b""
        except _READ_ERRORS as exc:
            raise CouldNotExtractError() from exc
    return files