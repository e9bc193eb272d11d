[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "seqkit-core"
version = "0.1.0"
description = "Biological sequence utilities: FASTA/FASTQ I/O, codon translation, sequence editing, probe matching and match bookkeeping"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "bioinformatics",
    "dna",
    "fasta",
    "fastq",
    "sequence",
    "translation",
    "probes",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Science/Research",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Bio-Informatics",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["seqkit_core"]

[tool.hatch.build.targets.sdist]
include = ["seqkit_core", "tests"]

[tool.pytest.ini_options]
addopts = "-ra"
