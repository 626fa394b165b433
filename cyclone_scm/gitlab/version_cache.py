"""Process-local memory of the API version detected per GitLab server."""

import threading

from cyclone_scm.metrics import gitlab_version_cache_lookups
from cyclone_scm.models import APIVersion, ServerIdentity


class VersionCache:
    """Thread-safe mapping of server identity to detected API version.

    Entries never expire: once a server is classified the answer is reused
    for the lifetime of the cache. Two threads probing the same unknown
    server concurrently both write the same answer.

    Example:
        >>> cache = VersionCache()
        >>> identity = ServerIdentity.from_server("https://gitlab.example.com/")
        >>> cache.put(identity, APIVersion.V4)
        >>> cache.get(ServerIdentity.from_server("HTTPS://gitlab.example.com"))
        <APIVersion.V4: 'v4'>
    """

    def __init__(self) -> None:
        self._versions: dict[ServerIdentity, APIVersion] = {}
        self._lock = threading.Lock()

    def get(self, identity: ServerIdentity) -> APIVersion | None:
        with self._lock:
            version = self._versions.get(identity)
        gitlab_version_cache_lookups.labels("miss" if version is None else "hit").inc()
        return version

    def put(self, identity: ServerIdentity, version: APIVersion) -> None:
        with self._lock:
            self._versions[identity] = version

    def __len__(self) -> int:
        with self._lock:
            return len(self._versions)
