"""In-memory implementation of BlobStore for testing."""


class FakeBlobStore:
    def __init__(self):
        self.blobs: dict[str, str] = {}
        self.fail_writes = False

    def write(self, key: str, content: str) -> bool:
        if self.fail_writes:
            return False
        self.blobs[key] = content
        return True

    def read(self, key: str) -> str | None:
        return self.blobs.get(key)

    def delete(self, key: str) -> bool:
        return self.blobs.pop(key, None) is not None
