from dataclasses import dataclass, field
from typing import MutableMapping, Optional


@dataclass
class HttpMetadata:
    content_type: Optional[str] = None
    content_language: Optional[str] = None
    content_disposition: Optional[str] = None
    content_encoding: Optional[str] = None
    cache_control: Optional[str] = None

    def write_headers(self, headers: MutableMapping[str, str]) -> None:
        """Copy the non-empty metadata fields into ``headers``."""
        values = {
            "Content-Type": self.content_type,
            "Content-Language": self.content_language,
            "Content-Disposition": self.content_disposition,
            "Content-Encoding": self.content_encoding,
            "Cache-Control": self.cache_control,
        }
        for name, value in values.items():
            if value:
                headers[name] = value

    def to_dict(self) -> dict:
        return {k: v for k, v in self.__dict__.items() if v}


@dataclass
class StoredObject:
    key: str
    body: bytes
    etag: str
    http_metadata: HttpMetadata = field(default_factory=HttpMetadata)

    @property
    def http_etag(self) -> str:
        return f'"{self.etag}"'


def normalize_etag(etag: str) -> str:
    return etag.strip().strip('"')


class StorageDriver:
    def get(self, key: str) -> Optional[StoredObject]:
        raise NotImplementedError

    def put(self, key: str, data: bytes, metadata: HttpMetadata) -> str:
        raise NotImplementedError

    def delete(self, key: str) -> None:
        raise NotImplementedError
