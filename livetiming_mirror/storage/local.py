import hashlib
import json
import os
from typing import Optional

from livetiming_mirror.errors import StorageError
from livetiming_mirror.storage.base import HttpMetadata, StorageDriver, StoredObject


class LocalStorage(StorageDriver):
    """Blob store on the local filesystem.

    Keys are opaque: each one is stored under the SHA-256 of the key, fanned
    out by its first two hex characters, so ``2023`` and ``2023/Index.json``
    are independent objects and no key can reach outside ``root``. The
    original key sits in the JSON metadata next to the object.
    """

    def __init__(self, root: str):
        self.root = os.path.abspath(root)
        self.objects_path = os.path.join(self.root, "objects")
        self.meta_path = os.path.join(self.root, "meta")

    def _paths(self, key: str):
        digest = hashlib.sha256(key.encode("utf-8")).hexdigest()
        return (
            os.path.join(self.objects_path, digest[:2], digest),
            os.path.join(self.meta_path, digest[:2], digest + ".json"),
        )

    def get(self, key: str) -> Optional[StoredObject]:
        path, meta = self._paths(key)
        if not os.path.isfile(path):
            return None
        try:
            with open(path, "rb") as f:
                body = f.read()
            info = {}
            if os.path.isfile(meta):
                with open(meta, "r", encoding="utf-8") as f:
                    info = json.load(f)
        except (OSError, ValueError) as e:
            raise StorageError("get", key, str(e)) from e
        etag = info.get("etag") or hashlib.md5(body).hexdigest()
        return StoredObject(
            key=key,
            body=body,
            etag=etag,
            http_metadata=HttpMetadata(**info.get("http_metadata", {})),
        )

    def put(self, key: str, data: bytes, metadata: HttpMetadata) -> str:
        path, meta = self._paths(key)
        etag = hashlib.md5(data).hexdigest()
        try:
            os.makedirs(os.path.dirname(path), exist_ok=True)
            os.makedirs(os.path.dirname(meta), exist_ok=True)
            with open(path, "wb") as f:
                f.write(data)
            with open(meta, "w", encoding="utf-8") as f:
                json.dump({"key": key, "etag": etag, "http_metadata": metadata.to_dict()}, f)
        except OSError as e:
            raise StorageError("put", key, str(e)) from e
        return etag

    def delete(self, key: str) -> None:
        path, meta = self._paths(key)
        try:
            for p in (path, meta):
                if os.path.isfile(p):
                    os.remove(p)
        except OSError as e:
            raise StorageError("delete", key, str(e)) from e
