"""Reading, indexing and writing FASTA files.

Input files may be given as paths (plain, gzip, bzip2 or xz compressed),
as binary streams, as a sequence mixing both, or as a mapping from file
names to either.  Record numbers and ``skip``/``nrec`` apply across all
files, in the order given.
"""

from __future__ import annotations

import bz2
import gzip
import io
import lzma
import os
import warnings
from collections.abc import Iterator, Mapping, Sequence
from contextlib import ExitStack, contextmanager
from dataclasses import dataclass, field
from typing import BinaryIO, Optional, Union

from .encoding import translate_bytes

IOBUF_SIZE = 20002
_MAX_CHUNK = IOBUF_SIZE - 1
COMMENT_MARKUP = b";"
DESC_MARKUP = b">"

Lookup = Sequence[Optional[int]]


class FastaFormatError(ValueError):
    """A FASTA file cannot be parsed."""


@dataclass(frozen=True)
class FastaIndexEntry:
    """Where a FASTA record lives: 1-based record and file numbers, byte offset."""

    recno: int
    fileno: int
    offset: int
    desc: str
    seqlength: int


@dataclass(frozen=True)
class _Header:
    recno: int
    offset: int
    desc: str


@dataclass
class _Cursor:
    recno: int = 0
    offset: int = 0
    ninvalid: int = 0


@dataclass
class _Record:
    recno: int
    fileno: int
    offset: int
    desc: str
    length: int = 0
    data: bytearray = field(default_factory=bytearray)


def _open_path(path: str) -> BinaryIO:
    with open(path, "rb") as f:
        magic = f.read(6)
    if magic.startswith(b"\x1f\x8b"):
        return gzip.open(path, "rb")
    if magic.startswith(b"BZh"):
        return bz2.open(path, "rb")
    if magic.startswith(b"\xfd7zXZ\x00"):
        return lzma.open(path, "rb")
    return open(path, "rb")


def _is_stream(obj) -> bool:
    return hasattr(obj, "read") and hasattr(obj, "readline")


@contextmanager
def _opened(files) -> Iterator[list[tuple[str, BinaryIO]]]:
    if isinstance(files, Mapping):
        items = list(files.items())
    elif isinstance(files, (str, bytes, os.PathLike)) or _is_stream(files):
        items = [(None, files)]
    else:
        items = [(None, f) for f in files]
    with ExitStack() as stack:
        streams: list[tuple[str, BinaryIO]] = []
        for i, (name, src) in enumerate(items, start=1):
            if _is_stream(src):
                if isinstance(src, io.TextIOBase):
                    raise TypeError("FASTA streams must be opened in binary mode")
                label = name if name is not None else getattr(src, "name", None)
                if label is None:
                    label = f"<stream {i}>"
                streams.append((str(label), src))
            else:
                path = os.fsdecode(src)
                stream = stack.enter_context(_open_path(path))
                streams.append((str(name) if name is not None else path, stream))
        yield streams


def _strip_eol(chunk: bytes) -> bytes:
    if chunk.endswith(b"\n"):
        chunk = chunk[:-1]
        if chunk.endswith(b"\r"):
            chunk = chunk[:-1]
    return chunk


def _parse(
    stream: BinaryIO,
    nrec: int,
    skip: int,
    seek_first_rec: bool,
    cursor: _Cursor,
    lkup: Optional[Lookup],
) -> Iterator[Union[_Header, bytes]]:
    """Yield a header for each loaded record, then the bytes of its sequence lines.

    Empty lines and comment lines are ignored.  When ``nrec`` records past
    ``skip`` have been seen, the stream is put back at the start of the
    next record and parsing stops.
    """
    lineno = 0
    eol = True
    dont_load: Optional[bool] = None
    is_desc = False
    while True:
        if eol:
            lineno += 1
        eol_prev = eol
        chunk = stream.readline(_MAX_CHUNK)
        if not chunk:
            break
        eol = chunk.endswith(b"\n") or len(chunk) < _MAX_CHUNK
        data = _strip_eol(chunk) if eol else chunk
        prev_offset = cursor.offset
        cursor.offset += len(chunk)
        if seek_first_rec:
            if eol_prev and data.startswith(DESC_MARKUP):
                seek_first_rec = False
            else:
                continue
        if eol_prev:
            if not data:
                continue
            is_comment = data.startswith(COMMENT_MARKUP)
            is_desc = data.startswith(DESC_MARKUP)
            if not eol and (is_comment or is_desc):
                raise FastaFormatError(f"cannot read line {lineno}, line is too long")
            if is_comment:
                continue
        if eol_prev and is_desc:
            if nrec >= 0 and cursor.recno >= skip + nrec:
                stream.seek(prev_offset)
                cursor.offset = prev_offset
                return
            dont_load = cursor.recno < skip
            if not dont_load:
                desc = data[len(DESC_MARKUP):].decode("utf-8", "surrogateescape")
                yield _Header(cursor.recno, prev_offset, desc)
            cursor.recno += 1
            continue
        if dont_load is None:
            raise FastaFormatError(
                f'"{DESC_MARKUP.decode()}" expected at beginning of line {lineno}'
            )
        if dont_load:
            continue
        if lkup is not None:
            data, ninvalid = translate_bytes(data, lkup)
            cursor.ninvalid += ninvalid
        yield data
    if seek_first_rec:
        raise FastaFormatError("no FASTA record found")


def _load(
    files,
    nrec: int,
    skip: int,
    seek_first_rec: bool,
    lkup: Optional[Lookup],
    *,
    keep_data: bool,
    restore: bool,
) -> list[_Record]:
    records: list[_Record] = []
    cursor = _Cursor()
    with _opened(files) as streams:
        for fileno, (name, stream) in enumerate(streams, start=1):
            start = stream.tell()
            cursor.offset = start
            cursor.ninvalid = 0
            try:
                for event in _parse(stream, nrec, skip, seek_first_rec, cursor, lkup):
                    if isinstance(event, _Header):
                        records.append(
                            _Record(event.recno + 1, fileno, event.offset, event.desc)
                        )
                    else:
                        record = records[-1]
                        record.length += len(event)
                        if keep_data:
                            record.data += event
            except FastaFormatError as exc:
                raise FastaFormatError(f"reading FASTA file {name}: {exc}") from None
            finally:
                if restore:
                    stream.seek(start)
            if cursor.ninvalid:
                warnings.warn(
                    f"reading FASTA file {name}: ignored {cursor.ninvalid} "
                    "invalid one-letter sequence codes",
                    stacklevel=3,
                )
    return records


def fasta_seqlengths(
    files,
    nrec: int = -1,
    skip: int = 0,
    seek_first_rec: bool = False,
    use_names: bool = True,
    lkup: Optional[Lookup] = None,
) -> tuple[list[int], Optional[list[str]]]:
    """Return the sequence lengths and, if ``use_names``, the descriptions.

    Every stream is put back where it was.  A negative ``nrec`` means all
    records.
    """
    records = _load(
        files, nrec, skip, seek_first_rec, lkup, keep_data=False, restore=True
    )
    lengths = [r.length for r in records]
    return lengths, ([r.desc for r in records] if use_names else None)


def read_fasta(
    files,
    nrec: int = -1,
    skip: int = 0,
    seek_first_rec: bool = False,
    use_names: bool = True,
    lkup: Optional[Lookup] = None,
) -> tuple[list[bytes], Optional[list[str]]]:
    """Read FASTA records; return their sequences and, if ``use_names``, descriptions.

    When ``nrec`` stops the reading early, each stream is left at the start
    of the first record not read.
    """
    records = _load(
        files, nrec, skip, seek_first_rec, lkup, keep_data=True, restore=False
    )
    sequences = [bytes(r.data) for r in records]
    return sequences, ([r.desc for r in records] if use_names else None)


def fasta_index(
    files,
    nrec: int = -1,
    skip: int = 0,
    seek_first_rec: bool = False,
    lkup: Optional[Lookup] = None,
) -> list[FastaIndexEntry]:
    """Index the FASTA records: number, file, byte offset, description, length."""
    records = _load(
        files, nrec, skip, seek_first_rec, lkup, keep_data=False, restore=False
    )
    return [
        FastaIndexEntry(r.recno, r.fileno, r.offset, r.desc, r.length) for r in records
    ]


def read_fasta_blocks(
    files,
    nrec_list: Sequence[Sequence[int]],
    offset_list: Sequence[Sequence[float]],
    lkup: Optional[Lookup] = None,
) -> list[bytes]:
    """Read blocks of consecutive records, one block per (count, offset) pair.

    ``nrec_list[i]`` and ``offset_list[i]`` describe the blocks of the i-th
    file; offsets are in bytes from the start of the file.
    """
    sequences: list[bytearray] = []
    with _opened(files) as streams:
        if len(nrec_list) != len(streams) or len(offset_list) != len(streams):
            raise ValueError("'nrec_list' and 'offset_list' need one element per file")
        for (name, stream), nrecs, offsets in zip(streams, nrec_list, offset_list):
            if len(nrecs) != len(offsets):
                raise ValueError("'nrec_list' and 'offset_list' must have the same shape")
            for block_nrec, block_offset in zip(nrecs, offsets):
                offset = int(round(block_offset))
                stream.seek(offset)
                cursor = _Cursor(offset=offset)
                try:
                    for event in _parse(stream, block_nrec, 0, False, cursor, lkup):
                        if isinstance(event, _Header):
                            sequences.append(bytearray())
                        else:
                            sequences[-1] += event
                except FastaFormatError as exc:
                    raise FastaFormatError(f"reading FASTA file {name}: {exc}") from None
    return [bytes(s) for s in sequences]


def _encode_sequence(seq: Union[str, bytes], lkup: Optional[Lookup]) -> bytes:
    data = seq.encode("latin-1") if isinstance(seq, str) else bytes(seq)
    if lkup is None:
        return data
    out = bytearray()
    for byte in data:
        code = lkup[byte] if byte < len(lkup) else None
        if code is None:
            raise ValueError(f"key {byte} not in lookup table")
        out.append(code)
    return bytes(out)


def write_fasta(
    sequences: Sequence[Union[str, bytes]],
    stream: BinaryIO,
    names: Optional[Sequence[Optional[str]]] = None,
    width: int = 80,
    lkup: Optional[Lookup] = None,
) -> None:
    """Write sequences to a binary stream, wrapping sequence lines at ``width``."""
    if width >= IOBUF_SIZE:
        raise ValueError(f"'width' must be <= {IOBUF_SIZE - 1}")
    if width < 1:
        raise ValueError("'width' must be >= 1")
    seqs = list(sequences)
    if names is not None:
        names = list(names)
        if len(names) != len(seqs):
            raise ValueError("'names' and 'sequences' must have the same length")
    for i, seq in enumerate(seqs):
        header = DESC_MARKUP
        if names is not None:
            if names[i] is None:
                raise ValueError("'names(x)' contains NAs")
            header += names[i].encode("utf-8", "surrogateescape")
        stream.write(header + b"\n")
        data = _encode_sequence(seq, lkup)
        for j in range(0, len(data), width):
            stream.write(data[j:j + width] + b"\n")