"""Exceptions raised by the loader pipeline.

Every error is fatal to one unit (one raw input's trip through the
pipeline) and never to the run. ``stage`` names the pipeline stage that
raised it so the unit report can say where a document stopped.

    LoaderError
    +-- ParseError           (reader: unsupported or corrupt input)
    +-- MissingContentError  (title determiner: first chunk has no text)
    +-- ClassificationError  (title determiner: model call failed)
    +-- StoreWriteError      (store writer: persistence failed)

An ``UNKNOWN`` title from the model is not an error; the batch is dropped
and the unit is reported as skipped.
"""
from __future__ import annotations


class LoaderError(Exception):
    stage = "pipeline"

    def __init__(self, message: str, source: str | None = None) -> None:
        self.message = message
        self.source = source
        super().__init__(message)

    def __str__(self) -> str:
        if self.source:
            return f"[{self.stage}] {self.source}: {self.message}"
        return f"[{self.stage}] {self.message}"


class ParseError(LoaderError):
    stage = "reader"


class MissingContentError(LoaderError):
    stage = "title_determiner"


class ClassificationError(LoaderError):
    stage = "title_determiner"


class StoreWriteError(LoaderError):
    stage = "store_writer"
