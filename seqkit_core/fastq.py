"""Reading and writing FASTQ files.

Input files are given as for the FASTA readers: paths (plain or
compressed), binary streams, a sequence of either, or a mapping from file
names to either.  Record numbers and ``skip``/``nrec`` apply across all
files, in the order given.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import BinaryIO, Optional, Union

from .encoding import translate_bytes
from .fasta import _MAX_CHUNK, _Cursor, _encode_sequence, _opened, _strip_eol

LINE1_MARKUP = b"@"
LINE3_MARKUP = b"+"
FAKE_QUALITY = b";"

Lookup = Sequence[Optional[int]]


class FastqFormatError(ValueError):
    """A FASTQ file cannot be parsed."""


@dataclass
class FastqResult:
    """Reads loaded from FASTQ files, with their ids and qualities when asked for."""

    sequences: list[bytes]
    names: Optional[list[str]] = None
    qualities: Optional[list[bytes]] = None


@dataclass
class _Record:
    seqid: str
    seq: bytearray = field(default_factory=bytearray)
    qual: bytearray = field(default_factory=bytearray)


def _parse(
    stream: BinaryIO,
    nrec: int,
    skip: int,
    seek_first_rec: bool,
    cursor: _Cursor,
    records: list[_Record],
    lkup: Optional[Lookup],
    load_quals: bool,
) -> None:
    """Append the records read from ``stream`` to ``records``.

    Empty lines are ignored.  When ``nrec`` records past ``skip`` have been
    seen, the stream is put back at the start of the next record.
    """
    lineno = 0
    eol = True
    lineinrecno = 0
    dont_load = True
    seqid = ""
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
            if eol_prev and data.startswith(LINE1_MARKUP):
                seek_first_rec = False
            else:
                continue
        if eol_prev:
            if not data:
                continue
            lineinrecno = lineinrecno % 4 + 1
        if not eol and lineinrecno in (1, 3):
            raise FastqFormatError(f"cannot read line {lineno}, line is too long")
        if lineinrecno == 1:
            if nrec >= 0 and cursor.recno >= skip + nrec:
                stream.seek(prev_offset)
                cursor.offset = prev_offset
                return
            if not data.startswith(LINE1_MARKUP):
                raise FastqFormatError(
                    f'"{LINE1_MARKUP.decode()}" expected at beginning of line {lineno}'
                )
            dont_load = cursor.recno < skip
            seqid = data[len(LINE1_MARKUP):].decode("utf-8", "surrogateescape")
        elif lineinrecno == 2:
            if dont_load:
                continue
            if eol_prev:
                records.append(_Record(seqid))
            if lkup is not None:
                data, ninvalid = translate_bytes(data, lkup)
                if ninvalid:
                    raise FastqFormatError(
                        f"line {lineno}: read sequence contains invalid letters"
                    )
            records[-1].seq += data
        elif lineinrecno == 3:
            if not data.startswith(LINE3_MARKUP):
                raise FastqFormatError(
                    f'"{LINE3_MARKUP.decode()}" expected at beginning of line {lineno}'
                )
        else:
            if eol:
                cursor.recno += 1
            if dont_load or not load_quals:
                continue
            record = records[-1]
            if eol_prev:
                record.qual = bytearray()
            if len(record.qual) + len(data) > len(record.seq):
                raise FastqFormatError(
                    f"line {lineno}: quality sequence is longer than read sequence"
                )
            record.qual += data
    if seek_first_rec:
        raise FastqFormatError("no FASTQ record found")


def _load(
    files,
    nrec: int,
    skip: int,
    seek_first_rec: bool,
    lkup: Optional[Lookup],
    *,
    load_quals: bool,
    restore: bool,
) -> list[_Record]:
    records: list[_Record] = []
    cursor = _Cursor()
    with _opened(files) as streams:
        for name, stream in streams:
            start = stream.tell()
            cursor.offset = start
            try:
                _parse(stream, nrec, skip, seek_first_rec, cursor, records, lkup, load_quals)
            except FastqFormatError as exc:
                raise FastqFormatError(f"reading FASTQ file {name}: {exc}") from None
            finally:
                if restore:
                    stream.seek(start)
    return records


def fastq_seqlengths(
    files, nrec: int = -1, skip: int = 0, seek_first_rec: bool = False
) -> list[int]:
    """Return the read lengths; every stream is put back where it was.

    Read letters are not checked and qualities are ignored.
    """
    records = _load(files, nrec, skip, seek_first_rec, None, load_quals=False, restore=True)
    return [len(r.seq) for r in records]


def read_fastq(
    files,
    nrec: int = -1,
    skip: int = 0,
    seek_first_rec: bool = False,
    use_names: bool = True,
    lkup: Optional[Lookup] = None,
    with_qualities: bool = False,
) -> FastqResult:
    """Read FASTQ records.

    With ``lkup``, read letters are encoded through it and a letter without
    a code is an error.  A quality line longer than its read is an error.
    """
    records = _load(
        files, nrec, skip, seek_first_rec, lkup, load_quals=with_qualities, restore=False
    )
    return FastqResult(
        sequences=[bytes(r.seq) for r in records],
        names=[r.seqid for r in records] if use_names else None,
        qualities=[bytes(r.qual) for r in records] if with_qualities else None,
    )


def _as_bytes(data: Union[str, bytes]) -> bytes:
    return data.encode("latin-1") if isinstance(data, str) else bytes(data)


def _record_id(
    names: Optional[Sequence[Optional[str]]],
    quality_names: Optional[Sequence[Optional[str]]],
    i: int,
) -> str:
    seqid = None
    if names is not None:
        seqid = names[i]
        if seqid is None:
            raise ValueError("'names(x)' contains NAs")
    if quality_names is not None:
        qualid = quality_names[i]
        if qualid is None:
            raise ValueError("'names(qualities)' contains NAs")
        if seqid is None:
            seqid = qualid
        elif qualid != seqid:
            raise ValueError(
                "when 'x' and 'qualities' both have names, they must be identical"
            )
    if seqid is None:
        raise ValueError("either 'x' or 'qualities' must have names")
    return seqid


def write_fastq(
    sequences: Sequence[Union[str, bytes]],
    stream: BinaryIO,
    names: Optional[Sequence[Optional[str]]] = None,
    qualities: Optional[Sequence[Union[str, bytes]]] = None,
    quality_names: Optional[Sequence[Optional[str]]] = None,
    lkup: Optional[Lookup] = None,
) -> None:
    """Write reads to a binary stream as 4-line FASTQ records.

    Record ids come from ``names`` or ``quality_names``.  Without
    ``qualities``, every quality letter is written as ``;``.
    """
    seqs = list(sequences)
    quals = None
    if qualities is not None:
        quals = list(qualities)
        if len(quals) != len(seqs):
            raise ValueError("'x' and 'qualities' must have the same length")
    else:
        quality_names = None
    for i, seq in enumerate(seqs):
        rec_id = _record_id(names, quality_names, i).encode("utf-8", "surrogateescape")
        data = _encode_sequence(seq, lkup)
        stream.write(LINE1_MARKUP + rec_id + b"\n")
        stream.write(data + b"\n")
        stream.write(LINE3_MARKUP + rec_id + b"\n")
        if quals is not None:
            qual = _as_bytes(quals[i])
            if len(qual) != len(data):
                raise ValueError("'x' and 'quality' must have the same width")
            stream.write(qual + b"\n")
        else:
            stream.write(FAKE_QUALITY * len(data) + b"\n")