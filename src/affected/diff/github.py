"""Changed files from the GitHub compare API."""

from __future__ import annotations

from typing import Any

import httpx
import structlog

from affected.core.errors import DiffFetchError
from affected.diff.models import ChangedFile, ChangeStatus
from affected.refs import RefPair

log = structlog.get_logger(__name__)

DEFAULT_API_URL = "https://api.github.com"
API_VERSION = "2022-11-28"
# Hard cap on the files list of one compare response
FILES_PER_RESPONSE = 300
PER_PAGE = 100


class GitHubCompareClient:
    """Changed files via ``GET /repos/{owner}/{repo}/compare/{base}...{head}``.

    Args:
        token: Bearer token; omitted from headers when empty (public repos).
        owner: Repository owner (user or organization).
        repo: Repository name.
        api_url: REST API root.
        timeout: Request timeout in seconds.
        transport: Optional httpx transport, used by tests.
    """

    def __init__(
        self,
        token: str | None,
        owner: str,
        repo: str,
        *,
        api_url: str = DEFAULT_API_URL,
        timeout: float = 30.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.owner = owner
        self.repo = repo
        self.api_url = api_url.rstrip("/")
        self._timeout = timeout
        self._transport = transport
        self._headers = {
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": API_VERSION,
        }
        if token:
            self._headers["Authorization"] = f"Bearer {token}"

    def compare_url(self, refs: RefPair) -> str:
        return f"{self.api_url}/repos/{self.owner}/{self.repo}/compare/{refs.base}...{refs.head}"

    def changed_files(self, refs: RefPair) -> list[ChangedFile]:
        """Files changed between the two commits, in API order.

        The API caps ``files`` at 300 entries per response, so pages are
        requested until one comes back short (or adds nothing new).

        Raises:
            DiffFetchError: Transport failure, non-2xx status, or unexpected payload.
        """
        url = self.compare_url(refs)
        seen: dict[str, ChangedFile] = {}
        try:
            with httpx.Client(
                headers=self._headers, timeout=self._timeout, transport=self._transport
            ) as client:
                page = 1
                while True:
                    files = self._fetch_page(client, url, refs, page)
                    before = len(seen)
                    for item in files:
                        if _has_filename(item):
                            seen.setdefault(item["filename"], _to_changed_file(item))
                    if len(files) < FILES_PER_RESPONSE or len(seen) == before:
                        break
                    page += 1
        except httpx.HTTPError as e:
            raise DiffFetchError.request_failed(refs.base, refs.head, str(e)) from e

        result = list(seen.values())
        log.info("compare_done", files=len(result), pages=page, base=refs.base, head=refs.head)
        return result

    def _fetch_page(
        self, client: httpx.Client, url: str, refs: RefPair, page: int
    ) -> list[Any]:
        log.debug("compare_request", url=url, page=page)
        response = client.get(url, params={"per_page": PER_PAGE, "page": page})

        if response.is_error:
            raise DiffFetchError.request_failed(
                refs.base,
                refs.head,
                _error_reason(response),
                status_code=response.status_code,
            )

        try:
            data = response.json()
        except ValueError as e:
            raise DiffFetchError.request_failed(
                refs.base, refs.head, "response is not JSON", status_code=response.status_code
            ) from e

        files = data.get("files") if isinstance(data, dict) else None
        if not isinstance(files, list):
            raise DiffFetchError.request_failed(
                refs.base,
                refs.head,
                "response has no 'files' list",
                status_code=response.status_code,
            )
        return files


def _has_filename(item: Any) -> bool:
    return isinstance(item, dict) and isinstance(item.get("filename"), str)


def _to_changed_file(item: dict[str, Any]) -> ChangedFile:
    return ChangedFile(
        filename=item["filename"],
        status=ChangeStatus.from_api(str(item.get("status", ""))),
        previous_filename=item.get("previous_filename"),
    )


def _error_reason(response: httpx.Response) -> str:
    reason = f"HTTP {response.status_code}"
    try:
        message = response.json().get("message")
    except (ValueError, AttributeError):
        message = None
    return f"{reason}: {message}" if message else reason
