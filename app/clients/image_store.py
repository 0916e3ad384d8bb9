"""
clients/image_store.py
----------------------

Binary store for product photos. Photos are written to a local
directory and referenced by their file path; the catalog only keeps
that reference on the product.

Releasing a photo is best effort: a failure to delete the file is
logged and reported through the return value, never raised, so it can
not fault the create/update/delete that triggered it.
"""

from __future__ import annotations

import asyncio
import logging
import os
import secrets
from pathlib import Path

from app.logging_config import log_event


class LocalImageStore:
    def __init__(self, upload_dir: str | os.PathLike[str]) -> None:
        self.upload_dir = Path(upload_dir)

    def _target(self, filename: str) -> Path:
        suffix = Path(filename or "").suffix.lower()
        return self.upload_dir / f"{secrets.token_hex(8)}{suffix}"

    async def save(self, filename: str, content: bytes) -> str:
        """Write ``content`` under a unique name and return its reference."""
        target = self._target(filename)

        def _write() -> None:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_bytes(content)

        await asyncio.to_thread(_write)
        return str(target)

    async def release(self, ref: str | None) -> bool:
        """Delete the file behind ``ref``; return whether it was removed."""
        if not ref:
            return False
        try:
            await asyncio.to_thread(os.remove, ref)
        except OSError as exc:
            log_event("image_release_failed", logging.WARNING, ref=ref, detalle=str(exc))
            return False
        log_event("image_released", ref=ref)
        return True
