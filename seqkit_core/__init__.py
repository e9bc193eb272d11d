"""Sequence utilities: byte encoding, FASTA/FASTQ I/O, translation, editing, probe and match handling."""

__version__ = "0.1.0"

__all__ = [
    "encoding",
    "strutils",
    "matchprobes",
    "unstrsplit",
    "match_reporting",
    "translate",
    "fasta",
    "fastq",
    "editing",
]