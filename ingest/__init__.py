"""Facial-landmark dataset import — IMM/ASF and iBug/PTS into a uniform corpus."""

from ingest.importer import DatabaseImporter, import_database
from ingest.types import Corpus, CorpusEntry, DatasetFormat, ImportParameters, ImportResult

__all__ = [
    "Corpus",
    "CorpusEntry",
    "DatabaseImporter",
    "DatasetFormat",
    "ImportParameters",
    "ImportResult",
    "import_database",
]
