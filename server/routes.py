"""Partition and manifest API routes."""

from fastapi import APIRouter, Depends, Path, Request, Response, status
from fastapi.concurrency import run_in_threadpool

from common.exceptions import NotFoundError
from common.types import Manifest
from recordstore.base import RecordStore
from server.dependencies import get_store
from server.schemas import ManifestRequest, ManifestResponse, PartitionIndexResponse

router = APIRouter(prefix="/namespaces/{namespace}/blobs/{blob_id}", tags=["Records"])


@router.put("/partitions/{index}", status_code=status.HTTP_204_NO_CONTENT)
async def put_partition(
    request: Request,
    namespace: str,
    blob_id: str,
    index: int = Path(..., ge=0),
    store: RecordStore = Depends(get_store),
):
    """
    Store one partition record from the raw request body.

    Raises:
        - 413: Payload larger than the record ceiling
        - 500: Storage failure
    """
    data = await request.body()
    await run_in_threadpool(store.put, namespace, blob_id, index, data)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/partitions/{index}")
async def get_partition(
    namespace: str,
    blob_id: str,
    index: int = Path(..., ge=0),
    store: RecordStore = Depends(get_store),
):
    """
    Return one partition record as application/octet-stream.

    Raises:
        - 404: No partition at this index
        - 500: Storage failure or checksum mismatch
    """
    data = await run_in_threadpool(store.get, namespace, blob_id, index)
    return Response(content=data, media_type="application/octet-stream")


@router.get("/partitions", response_model=PartitionIndexResponse)
async def list_partitions(
    namespace: str,
    blob_id: str,
    store: RecordStore = Depends(get_store),
):
    """List the stored partition indices of a blob in ascending order."""
    indices = await run_in_threadpool(store.list_indices, namespace, blob_id)
    return PartitionIndexResponse(indices=indices)


@router.put("/manifest", status_code=status.HTTP_204_NO_CONTENT)
async def put_manifest(
    namespace: str,
    blob_id: str,
    body: ManifestRequest,
    store: RecordStore = Depends(get_store),
):
    """Commit the manifest of a blob."""
    manifest = Manifest(blob_id=blob_id, partition_count=body.partition_count, size=body.size)
    await run_in_threadpool(store.put_manifest, namespace, manifest)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/manifest", response_model=ManifestResponse)
async def get_manifest(
    namespace: str,
    blob_id: str,
    store: RecordStore = Depends(get_store),
):
    """
    Return the manifest of a blob.

    Raises:
        - 404: Blob was never committed
    """
    manifest = await run_in_threadpool(store.get_manifest, namespace, blob_id)
    if manifest is None:
        raise NotFoundError(f"No manifest for blob {blob_id} in namespace {namespace}")
    return ManifestResponse(
        blob_id=manifest.blob_id,
        partition_count=manifest.partition_count,
        size=manifest.size,
    )
