"""File-backed record store over spreadsheet datasets."""

import os
import shutil
import tempfile
import time
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, List, Mapping, Optional, Set, Tuple, Union

from filelock import Timeout

from record_store import codec, locator, pipeline
from record_store.exceptions import (
    DatasetNotFoundError,
    RecordNotFoundError,
    RecordStoreError,
    StorageError,
    ValidationError,
)
from record_store.labels import header_fields, header_labels
from record_store.locking import dataset_lock
from record_store.models import ID_FIELD, Dataset, Record, RecordDetail, RecordPage, RecordQuery
from record_store.models.record import normalize_data
from utils.logging import logger


class RecordStore(ABC):
    """Capability interface for dataset record operations."""

    @abstractmethod
    def list_records(self, name: str, query: Optional[RecordQuery] = None) -> RecordPage:
        """Search, sort and paginate the records of a dataset."""

    @abstractmethod
    def get_record(self, name: str, record_id: str) -> RecordDetail:
        """Fetch one record by id."""

    @abstractmethod
    def create_record(self, name: str, data: Mapping[str, Any]) -> Record:
        """Append a record with a freshly assigned id."""

    @abstractmethod
    def update_record(self, name: str, record_id: str, data: Mapping[str, Any]) -> Record:
        """Replace every field of a record except its id."""

    @abstractmethod
    def delete_record(self, name: str, record_id: str) -> Record:
        """Remove a record and return it."""

    @abstractmethod
    def read_dataset(self, name: str) -> Tuple[Dataset, bytes]:
        """Return the raw bytes of a dataset's backing file."""


def generate_record_id(existing_ids: Set[str]) -> str:
    """Milliseconds since the epoch, bumped until it does not collide with an existing id."""
    candidate = int(time.time() * 1000)
    while str(candidate) in existing_ids:
        candidate += 1
    return str(candidate)


def _find_index(records: List[Record], record_id: Union[str, int]) -> int:
    target = str(record_id)
    for index, record in enumerate(records):
        if str(record.get(ID_FIELD, "")) == target:
            return index
    raise RecordNotFoundError(f"Record with {ID_FIELD} {record_id} not found")


def _extend_headers(headers: List[str], record: Record) -> None:
    """Append columns introduced by ``record`` so they survive the rewrite."""
    if ID_FIELD not in headers:
        headers.insert(0, ID_FIELD)
    for key in record:
        if key not in headers:
            headers.append(key)


class FileRecordStore(RecordStore):
    """Record store where each dataset is one xlsx file in a directory.

    Every call re-reads the file; every mutation rewrites it in full while holding the
    dataset's advisory lock.
    """

    def __init__(self, directory: Union[str, Path], lock_timeout: float = -1) -> None:
        self.directory = Path(directory)
        self.lock_timeout = lock_timeout

    def resolve(self, name: str) -> Dataset:
        """Resolve a dataset name without checking that the file exists.

        Raises:
            ValidationError: If the name would point outside the uploads directory
        """
        if name in (".", "..") or "/" in name or "\\" in name or os.sep in name:
            raise ValidationError(f"Invalid dataset name '{name}'")
        return Dataset(name=name, path=locator.resolve(name, self.directory))

    def _require(self, name: str) -> Dataset:
        dataset = self.resolve(name)
        if not dataset.exists:
            raise DatasetNotFoundError(f"Dataset '{name}' not found")
        return dataset

    def _read_bytes(self, dataset: Dataset) -> bytes:
        try:
            return dataset.path.read_bytes()
        except OSError as e:
            raise StorageError(f"Failed to read dataset '{dataset.name}': {str(e)}") from e

    def _load(self, dataset: Dataset) -> Tuple[List[str], List[Record]]:
        return codec.decode(self._read_bytes(dataset))

    def _save(self, dataset: Dataset, headers: List[str], records: List[Record]) -> None:
        """Write to a hidden temp file beside the dataset, then swap it in.

        Lock-free readers see either the old file or the new one, never a partial write.
        """
        content = codec.encode(records, headers)
        fd, temp_path = tempfile.mkstemp(dir=dataset.path.parent, prefix=f".{dataset.path.name}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "wb") as temp_file:
                temp_file.write(content)
            shutil.copymode(dataset.path, temp_path)
            os.replace(temp_path, dataset.path)
        except OSError as e:
            if os.path.exists(temp_path):
                os.remove(temp_path)
            raise StorageError(f"Failed to write dataset '{dataset.name}': {str(e)}") from e
        logger.debug(f"Wrote {len(records)} records to {dataset.path}")

    def _mutate(self, name: str, operation: str, mutation) -> Record:
        """Run ``mutation(headers, records)`` under the dataset lock and persist the result."""
        dataset = self._require(name)
        try:
            with dataset_lock(dataset.path, self.lock_timeout):
                headers, records = self._load(dataset)
                result = mutation(headers, records)
                self._save(dataset, headers, records)
                return result
        except Timeout as e:
            raise StorageError(f"Timed out waiting to {operation} in dataset '{name}'") from e
        except RecordStoreError:
            raise
        except OSError as e:
            raise StorageError(f"Failed to {operation} in dataset '{name}': {str(e)}") from e

    def list_records(self, name: str, query: Optional[RecordQuery] = None) -> RecordPage:
        query = query or RecordQuery()
        logger.debug(f"Listing records of dataset '{name}' with {query.model_dump()}")
        dataset = self._require(name)
        headers, records = self._load(dataset)
        page = pipeline.run_query(records, query)
        return RecordPage(headers=header_fields(headers), **page.model_dump())

    def get_record(self, name: str, record_id: str) -> RecordDetail:
        logger.debug(f"Getting record {record_id} of dataset '{name}'")
        dataset = self._require(name)
        headers, records = self._load(dataset)
        record = records[_find_index(records, record_id)]
        return RecordDetail(record=record, headers=header_labels(headers))

    def create_record(self, name: str, data: Mapping[str, Any]) -> Record:
        logger.info(f"Creating record in dataset '{name}'")

        def append(headers: List[str], records: List[Record]) -> Record:
            existing_ids = {record.get(ID_FIELD, "") for record in records}
            # The caller never chooses the id
            new_record = {**normalize_data(data), ID_FIELD: generate_record_id(existing_ids)}
            _extend_headers(headers, new_record)
            records.append(new_record)
            return new_record

        record = self._mutate(name, "create record", append)
        logger.info(f"Record created with {ID_FIELD}: {record[ID_FIELD]}")
        return record

    def update_record(self, name: str, record_id: str, data: Mapping[str, Any]) -> Record:
        logger.info(f"Updating record {record_id} in dataset '{name}'")

        def replace(headers: List[str], records: List[Record]) -> Record:
            index = _find_index(records, record_id)
            current = records[index]
            updated = {**current, **normalize_data(data), ID_FIELD: current[ID_FIELD]}
            _extend_headers(headers, updated)
            records[index] = updated
            return updated

        return self._mutate(name, "update record", replace)

    def delete_record(self, name: str, record_id: str) -> Record:
        logger.info(f"Deleting record {record_id} from dataset '{name}'")

        def remove(headers: List[str], records: List[Record]) -> Record:
            return records.pop(_find_index(records, record_id))

        return self._mutate(name, "delete record", remove)

    def read_dataset(self, name: str) -> Tuple[Dataset, bytes]:
        logger.debug(f"Reading raw bytes of dataset '{name}'")
        dataset = self._require(name)
        return dataset, self._read_bytes(dataset)
