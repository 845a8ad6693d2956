"""In-memory record store."""

from typing import Dict, List, Optional, Tuple

from common.constants import DEFAULT_MAX_RECORD_SIZE_BYTES
from common.exceptions import NotFoundError
from common.types import Manifest
from recordstore.base import RecordStore


class MemoryRecordStore(RecordStore):
    """Dict-backed record store, useful for tests and embedding."""

    def __init__(self, max_record_size: int = DEFAULT_MAX_RECORD_SIZE_BYTES):
        super().__init__(max_record_size)
        self._records: Dict[Tuple[str, str, int], bytes] = {}
        self._manifests: Dict[Tuple[str, str], Manifest] = {}

    def put(self, namespace: str, blob_id: str, index: int, data: bytes) -> None:
        self.check_record_size(data)
        self._records[(namespace, blob_id, index)] = bytes(data)

    def get(self, namespace: str, blob_id: str, index: int) -> bytes:
        try:
            return self._records[(namespace, blob_id, index)]
        except KeyError:
            raise NotFoundError(
                f"No partition {index} for blob {blob_id} in namespace {namespace}"
            ) from None

    def list_indices(self, namespace: str, blob_id: str) -> List[int]:
        return sorted(
            index
            for (ns, bid, index) in self._records
            if ns == namespace and bid == blob_id
        )

    def put_manifest(self, namespace: str, manifest: Manifest) -> None:
        self._manifests[(namespace, manifest.blob_id)] = manifest

    def get_manifest(self, namespace: str, blob_id: str) -> Optional[Manifest]:
        return self._manifests.get((namespace, blob_id))

    def __len__(self) -> int:
        return len(self._records)
