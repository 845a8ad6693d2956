"""HTTP client record store talking to the stash record server."""

import time
import uuid
from typing import List, Optional

import httpx

from common.constants import DEFAULT_MAX_RECORD_SIZE_BYTES
from common.exceptions import (
    BackendError,
    ChecksumMismatchError,
    NotFoundError,
    RecordTooLargeError,
)
from common.logging_config import get_logger
from common.types import Manifest
from recordstore.base import RecordStore

logger = get_logger(__name__)


class HttpRecordStore(RecordStore):
    """Record store backed by the record server API, with retry on 5xx and network failures."""

    def __init__(
        self,
        base_url: str,
        timeout: float = 30,
        max_retries: int = 3,
        retry_backoff_multiplier: float = 2,
        max_record_size: int = DEFAULT_MAX_RECORD_SIZE_BYTES,
        client: Optional[httpx.Client] = None,
    ):
        """
        Initialize the HTTP record store.

        Args:
            base_url: Record server URL (e.g., "http://localhost:8000")
            timeout: Request timeout in seconds
            max_retries: Retry attempts after the first request
            retry_backoff_multiplier: Base of the exponential backoff delay
            max_record_size: Per-record payload ceiling in bytes
            client: Pre-built httpx client (e.g., a FastAPI TestClient)
        """
        super().__init__(max_record_size)
        self.base_url = base_url
        self.max_retries = max_retries
        self.retry_backoff_multiplier = retry_backoff_multiplier
        self._owns_client = client is None
        self.session = client if client is not None else httpx.Client(base_url=base_url, timeout=timeout)
        self.request_id = None
        logger.debug(f"Initialized HttpRecordStore [base_url={base_url}]")

    def _request_with_retry(self, method: str, endpoint: str, **kwargs) -> httpx.Response:
        """
        Make HTTP request with retry logic on 5xx errors and network failures.

        Args:
            method: HTTP method (GET, PUT, etc.)
            endpoint: API endpoint path
            **kwargs: Additional arguments to pass to httpx request

        Returns:
            HTTP response object (any status below 500, or the last 5xx)

        Raises:
            BackendError: If max retries exceeded on network failures
        """
        self.request_id = str(uuid.uuid4())
        headers = kwargs.setdefault('headers', {})
        headers['X-Request-ID'] = self.request_id

        logger.debug(f"Making request: {method} {endpoint} [request_id={self.request_id}]")

        last_exception = None
        for attempt in range(self.max_retries + 1):
            try:
                response = self.session.request(method, endpoint, **kwargs)
            except (httpx.ConnectError, httpx.TimeoutException) as e:
                last_exception = e
                if attempt < self.max_retries:
                    delay = self.retry_backoff_multiplier ** attempt
                    logger.warning(
                        f"Network error (attempt {attempt + 1}/{self.max_retries + 1}): "
                        f"{method} {endpoint} error={type(e).__name__}, retrying in {delay}s [request_id={self.request_id}]"
                    )
                    time.sleep(delay)
                    continue
                logger.error(
                    f"Network error (max retries exceeded): {method} {endpoint} error={e} [request_id={self.request_id}]"
                )
                break
            except httpx.HTTPError as e:
                raise BackendError(f"Request to record server failed: {e}") from e

            logger.debug(
                f"Response received: {method} {endpoint} status={response.status_code} [request_id={self.request_id}]"
            )

            if response.status_code >= 500 and attempt < self.max_retries:
                delay = self.retry_backoff_multiplier ** attempt
                logger.warning(
                    f"Server error (attempt {attempt + 1}/{self.max_retries + 1}): "
                    f"{method} {endpoint} status={response.status_code}, retrying in {delay}s [request_id={self.request_id}]"
                )
                time.sleep(delay)
                continue

            return response

        if isinstance(last_exception, httpx.TimeoutException):
            raise BackendError("Request to record server timed out") from last_exception
        raise BackendError(f"Cannot connect to record server at {self.base_url}") from last_exception

    def _raise_for_error(self, response: httpx.Response) -> None:
        """
        Map error responses onto the stash error taxonomy.

        Args:
            response: HTTP response object
        """
        if response.status_code < 400:
            return

        try:
            error_data = response.json()
            detail = error_data.get('detail', 'Unknown error')
            code = error_data.get('code', 'UNKNOWN')
        except ValueError:
            detail = response.text or 'Unknown error'
            code = 'UNKNOWN'

        if response.status_code == 404:
            raise NotFoundError(detail)
        if response.status_code == 413 or code == 'RECORD_TOO_LARGE':
            raise RecordTooLargeError(detail)
        if code == 'CHECKSUM_MISMATCH':
            raise ChecksumMismatchError(detail)
        raise BackendError(f"Record server error {response.status_code} ({code}): {detail}")

    @staticmethod
    def _blob_path(namespace: str, blob_id: str) -> str:
        return f"/namespaces/{namespace}/blobs/{blob_id}"

    def put(self, namespace: str, blob_id: str, index: int, data: bytes) -> None:
        self.check_record_size(data)
        response = self._request_with_retry(
            'PUT',
            f"{self._blob_path(namespace, blob_id)}/partitions/{index}",
            content=data,
            headers={'Content-Type': 'application/octet-stream'},
        )
        self._raise_for_error(response)

    def get(self, namespace: str, blob_id: str, index: int) -> bytes:
        response = self._request_with_retry(
            'GET', f"{self._blob_path(namespace, blob_id)}/partitions/{index}"
        )
        self._raise_for_error(response)
        return response.content

    def list_indices(self, namespace: str, blob_id: str) -> List[int]:
        response = self._request_with_retry(
            'GET', f"{self._blob_path(namespace, blob_id)}/partitions"
        )
        self._raise_for_error(response)
        return sorted(response.json()['indices'])

    def put_manifest(self, namespace: str, manifest: Manifest) -> None:
        response = self._request_with_retry(
            'PUT',
            f"{self._blob_path(namespace, manifest.blob_id)}/manifest",
            json={'partition_count': manifest.partition_count, 'size': manifest.size},
        )
        self._raise_for_error(response)

    def get_manifest(self, namespace: str, blob_id: str) -> Optional[Manifest]:
        response = self._request_with_retry(
            'GET', f"{self._blob_path(namespace, blob_id)}/manifest"
        )
        if response.status_code == 404:
            return None
        self._raise_for_error(response)
        data = response.json()
        return Manifest(blob_id=blob_id, partition_count=data['partition_count'], size=data['size'])

    def close(self) -> None:
        if self._owns_client:
            self.session.close()
