"""Dataset import orchestration.

Detects the annotation format, enumerates candidates, and turns each
(annotation, image) pair into a corpus entry:

    detect → enumerate → load rects → per candidate:
        parse → decode → (ASF) to pixels → resolve rect → scale → append
        → (optional) append mirrored copy

Fatal problems (unknown format, rectangle file errors) abort before any
entry is produced. Per-candidate parse/decode failures skip that candidate.
Nothing in the taxonomy raises across ``DatabaseImporter.load``; callers get
an ``ImportResult``.
"""

from __future__ import annotations

from pathlib import Path

import numpy as np
from loguru import logger

from ingest.codec import OpenCVImageCodec
from ingest.errors import ImageDecodeError, IngestError, RectangleCountMismatchError
from ingest.files import find_files_in_dir
from ingest.formats import FormatStrategy, detect_format, strategy_for
from ingest.mirror import MirrorAugmenter
from ingest.rectangles import RectangleStore
from ingest.scaling import needs_scaling, scale_image_shape_and_rect
from ingest.types import (
    IMAGE_EXTENSION,
    CoordinateSpace,
    Corpus,
    CorpusEntry,
    DatasetFormat,
    ImageCodec,
    ImportParameters,
    ImportResult,
    SkippedEntry,
)


class DatabaseImporter:
    """Import IMM (.asf) and iBug (.pts) face databases.

    Usage:
        >>> importer = DatabaseImporter(ImportParameters(max_image_side_length=640))
        >>> corpus = Corpus()
        >>> result = importer.import_into("data/ibug_300W", corpus)
        >>> print(result.message)
    """

    def __init__(
        self,
        params: ImportParameters | None = None,
        codec: ImageCodec | None = None,
    ) -> None:
        self._params = params or ImportParameters()
        self._codec = codec or OpenCVImageCodec()
        self._mirror = MirrorAugmenter(self._codec)

    @property
    def params(self) -> ImportParameters:
        return self._params

    def load(
        self,
        directory: str | Path,
        rectangle_file: str | Path | None = None,
    ) -> ImportResult:
        """Import ``directory`` and return the new entries.

        Args:
            directory: Dataset root; searched recursively.
            rectangle_file: Optional rectangle list, one per candidate in
                enumeration order. Without it each entry uses the tight
                bounds of its shape.

        Returns:
            ImportResult; ``success`` is True iff at least one entry was produced.
        """
        dataset_format = detect_format(directory)
        if dataset_format is DatasetFormat.UNKNOWN:
            message = f"Unknown database format in {directory}"
            logger.warning(message)
            return ImportResult(success=False, message=message)

        strategy = strategy_for(dataset_format)
        paths = find_files_in_dir(directory, strategy.extension, recursive=True)
        logger.info(
            f"Loading {dataset_format.value} database | Found {len(paths)} candidate entries"
        )

        try:
            store = RectangleStore.load(rectangle_file)
            store.validate(len(paths))
        except RectangleCountMismatchError as e:
            logger.warning(str(e))
            return ImportResult(
                success=False,
                message=str(e),
                format=dataset_format,
                candidates=len(paths),
                rectangles_loaded=e.found,
            )
        except (IngestError, OSError) as e:
            message = f"Failed to load rectangles: {e}"
            logger.warning(message)
            return ImportResult(
                success=False,
                message=message,
                format=dataset_format,
                candidates=len(paths),
            )

        if store.uses_fallback:
            logger.info("No rectangles found, using tight axis aligned bounds.")

        entries: list[CorpusEntry] = []
        skipped: list[SkippedEntry] = []

        for i, base_path in enumerate(paths):
            try:
                new_entries = self._load_entry(strategy, store, i, base_path)
            except (IngestError, OSError) as e:
                logger.warning(f"Skipping {base_path}: {e}")
                skipped.append(SkippedEntry(base_path=base_path, reason=str(e)))
                continue
            entries.extend(new_entries)

        message = f"Successfully loaded {len(entries)} entries from database."
        if not entries:
            message = f"No entries loaded from {directory} ({len(skipped)} skipped)."
        logger.info(message)

        return ImportResult(
            success=len(entries) > 0,
            message=message,
            format=dataset_format,
            candidates=len(paths),
            entries=entries,
            skipped=skipped,
            rectangles_loaded=len(store),
        )

    def import_into(
        self,
        directory: str | Path,
        corpus: Corpus,
        rectangle_file: str | Path | None = None,
    ) -> ImportResult:
        """Import ``directory`` and append the new entries to ``corpus``.

        Existing corpus entries are kept.
        """
        result = self.load(directory, rectangle_file)
        corpus.extend(result.entries)
        return result

    def _load_entry(
        self,
        strategy: FormatStrategy,
        store: RectangleStore,
        index: int,
        base_path: str,
    ) -> list[CorpusEntry]:
        """Build the entry (and its mirrored copy) for one candidate.

        Raises:
            ShapeParseError: If the annotation cannot be parsed.
            ImageDecodeError: If the image cannot be decoded.
        """
        shape = strategy.parse(strategy.annotation_path(base_path))

        image_path = f"{base_path}.{IMAGE_EXTENSION}"
        image = self._codec.decode_grayscale(image_path)
        if image is None:
            raise ImageDecodeError(f"Cannot decode image {image_path}")

        height, width = image.shape[:2]
        if strategy.coordinate_space is CoordinateSpace.NORMALIZED:
            shape[0, :] *= np.float32(width)
            shape[1, :] *= np.float32(height)

        rect = store.resolve(index, shape)

        scale, factor = needs_scaling((width, height), self._params)
        if scale:
            logger.debug(f"Scaling {base_path} by {factor:.4f}")
            image, shape, rect = scale_image_shape_and_rect(
                image, shape, rect, factor, codec=self._codec
            )

        entry = CorpusEntry(image=image, shape=shape, rect=rect)
        if not self._params.generate_vertically_mirrored:
            return [entry]
        return [entry, self._mirror.augment(entry)]


def import_database(
    directory: str | Path,
    rectangle_file: str | Path | None,
    corpus: Corpus,
    params: ImportParameters | None = None,
    codec: ImageCodec | None = None,
) -> ImportResult:
    """Detect the format of ``directory`` and append its entries to ``corpus``."""
    return DatabaseImporter(params, codec).import_into(directory, corpus, rectangle_file)
