# seqkit-core

Small, dependency-free building blocks for handling biological sequences:
reading and writing FASTA and FASTQ, translating DNA into amino acids,
editing sequences at given positions, matching array probes and
collecting match results.

## Installation

```
pip install .
```

To run the test suite:

```
pip install ".[test]"
pytest
```

## Modules

| Module | Contents |
| --- | --- |
| `seqkit_core.encoding` | Byte tables of 256 entries (`None` for a byte without a code): `table_from_lkup`, `lkup_from_table`, `byte2offset_from_codes`, `byte2offset_from_letters`, `translate_bytes`; and `TwobitEncoder`, a rolling two-bit signature of the last `buflength` bases (`reset`, `shift`, `signature`, `signature_at`). |
| `seqkit_core.strutils` | `compbase`, `longest_consecutive`, `lcprefix`, `lcsuffix`. |
| `seqkit_core.matchprobes` | `strstr_with_pmormm` (returns a `ProbeMatch`) and `matchprobes`: find probes in sequences, either exactly or with the base at 0-based position 12 complemented. |
| `seqkit_core.unstrsplit` | `unstrsplit`: join each group of sequences with a separator; a mapping keeps its keys. |
| `seqkit_core.match_reporting` | `MatchMode`, `parse_match_mode`, `MatchBuf` (per-pair counts, starts, widths, ends) and `MatchReporter` (an active pair and a start shift on top of a `MatchBuf`). |
| `seqkit_core.translate` | `translate_sequence` and `translate_set` turn DNA into amino acids through codon lookup tables; `FuzzyCodonAction` chooses what happens to codons with ambiguous bases; problems raise `TranslationError`. `translate_set` warns about ignored trailing bases. |
| `seqkit_core.fasta` | `read_fasta`, `fasta_seqlengths`, `fasta_index` (a list of `FastaIndexEntry`), `read_fasta_blocks`, `write_fasta`. Malformed input raises `FastaFormatError`. |
| `seqkit_core.fastq` | `read_fastq` (returns a `FastqResult`), `fastq_seqlengths`, `write_fastq`. Malformed input raises `FastqFormatError`. |
| `seqkit_core.editing` | `replace_at`, `replace_at_set`, `replace_letter_at`, `inplace_replace_letter_at` (with `NotExtendingAction` for letters that do not extend the IUPAC letter they replace), `xscat` and `xscat_set`. |

## Examples

```python
from seqkit_core.strutils import compbase, longest_consecutive, lcprefix, lcsuffix

compbase("A")                         # 'T'
longest_consecutive(["AAACAA"], "A")  # [3]
lcprefix("ACGT", "ACGA")              # 3
lcsuffix("ACGT", "TCGT")              # 3
```

```python
from seqkit_core.editing import replace_at, xscat, xscat_set
from seqkit_core.unstrsplit import unstrsplit

replace_at("ACGTACGT", [(2, 2)], ["TT"])  # 'ATTTACGT'  (ranges are (start, width), 1-based)
xscat("AC", "GT")                         # 'ACGT'
xscat_set(["A", "C"], ["G"])              # ['AG', 'CG']  (shorter sets are recycled)
unstrsplit([["AC", "GT"], ["T"]], "-")    # ['AC-GT', 'T']
```

```python
from seqkit_core.match_reporting import MatchBuf

buf = MatchBuf("MATCHES_AS_ENDS", 2)
buf.report(0, 5, 3)   # pair 0, start 5, width 3
buf.as_result()       # [[7], []]
```

### FASTA and FASTQ

The readers take files as a path (plain, gzip, bzip2 or xz, detected from
the file's first bytes), a binary stream, a sequence of either, or a
mapping from file names to either. Every reader has the same record
selection options: `nrec` (how many records; negative means all), `skip`
(how many to skip first) and `seek_first_rec` (skip leading lines until
the first record header). Record numbers run across all the files given.
An optional `lkup` byte table encodes sequence letters; in FASTA,
letters without a code are dropped with a warning, in FASTQ they are an
error. Empty lines are ignored, and in FASTA so are lines starting with `;`.

```python
from seqkit_core.fasta import read_fasta, fasta_index, write_fasta

sequences, names = read_fasta("reads.fa")
index = fasta_index(["a.fa", "b.fa.gz"])   # recno, fileno, offset, desc, seqlength

with open("out.fa", "wb") as out:
    write_fasta([b"ACGTACGT"], out, names=["seq1"], width=4)
```

```python
from seqkit_core.fastq import read_fastq, write_fastq

result = read_fastq("reads.fq", with_qualities=True)
result.sequences, result.names, result.qualities

with open("out.fq", "wb") as out:
    write_fastq([b"ACGT"], out, names=["read1"])   # qualities default to ';'
```

Errors in the input are raised as exceptions naming the file and, where
it applies, the line.

## What it does not do

- There is no command-line program; everything is used from Python.
- `MatchBuf` and `MatchReporter` only store and present matches; the
  package has no pattern-search or dictionary-matching engine that
  produces them.
- Sequences are plain `str` or `bytes`; there are no sequence container
  classes, alphabets or reverse-complement helpers beyond `compbase`.