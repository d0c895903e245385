"""The ``java:heapdump`` command: fetch a heap dump from a dyno and save it locally."""

import logging
import os
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Callable, Optional

from rich.console import Console

from java_heapdump.api import PlatformClient
from java_heapdump.config import Settings
from java_heapdump.errors import FileWriteError, InvalidDynoError, NoProcessesError
from java_heapdump.payload import decode, validate
from java_heapdump.picker import Selector, select_one
from java_heapdump.protocol import AttachRequest, parse_attach_result, parse_dynos

log = logging.getLogger(__name__)


class State(Enum):
    RESOLVING_DYNO = "resolving_dyno"
    INVOKING = "invoking"
    VALIDATING = "validating"
    DECODING = "decoding"
    PERSISTING = "persisting"
    DONE = "done"
    FAILED = "failed"


@dataclass
class HeapDumpArgs:
    app: str
    dyno: Optional[str] = None
    filename: Optional[str] = None


def dump_filename(app: str, dyno: str, now: datetime) -> str:
    # month is zero-based and nothing is zero-padded, matching files produced by earlier releases
    return (
        f"{app}_{dyno}_{now.month - 1}-{now.day}-{now.year}"
        f"_{now.hour}-{now.minute}-{now.second}.hprof"
    )


class HeapDumpCommand:
    def __init__(
        self,
        api: PlatformClient,
        settings: Settings,
        selector: Selector = select_one,
        console: Optional[Console] = None,
        cwd: Optional[Callable[[], str]] = None,
        now: Optional[Callable[[], datetime]] = None,
    ):
        self._api = api
        self._settings = settings
        self._selector = selector
        self._console = console or Console()
        self._cwd = cwd or os.getcwd
        self._now = now or datetime.now
        self.state = State.RESOLVING_DYNO

    async def resolve_dyno(self, app: str, dyno: Optional[str] = None) -> str:
        dynos = parse_dynos(await self._api.get(f"/apps/{app}/dynos"))
        names = [d.identifier for d in dynos]
        if not names:
            raise NoProcessesError(app)
        if not dyno:
            if len(names) == 1:
                return names[0]
            return await self._selector(names, "")
        if dyno not in names:
            raise InvalidDynoError(dyno)
        return dyno

    async def fetch_heap_dump(self, app: str, dyno: str) -> bytes:
        self.state = State.INVOKING
        body = AttachRequest(alias=self._settings.alias).model_dump()
        output = parse_attach_result(await self._api.post(body, f"/apps/{app}/dynos/{dyno}/actions/attach"))
        self.state = State.VALIDATING
        encoded = validate(output, self._settings.min_payload_chars)
        self.state = State.DECODING
        data = decode(encoded)
        log.debug("decoded %d bytes from %d characters of output", len(data), len(encoded))
        return data

    def persist(self, app: str, dyno: str, data: bytes, filename: Optional[str] = None) -> str:
        self.state = State.PERSISTING
        name = filename or dump_filename(app, dyno, self._now())
        # always relative to the working directory, even when name starts with "/"
        path = os.path.abspath(self._cwd() + "/" + name)
        try:
            with open(path, "wb") as f:
                f.write(data)
        except OSError as e:
            raise FileWriteError(path, e.strerror or str(e)) from e
        return path

    async def run(self, args: HeapDumpArgs) -> str:
        self.state = State.RESOLVING_DYNO
        try:
            dyno = await self.resolve_dyno(args.app, args.dyno)
            with self._console.status(f"Fetching heap dump from dyno {dyno} on {args.app}"):
                data = await self.fetch_heap_dump(args.app, dyno)
                path = self.persist(args.app, dyno, data, args.filename)
        except BaseException:
            self.state = State.FAILED
            raise
        self.state = State.DONE
        self._console.print(f"Heap dump successfully saved as {path}", markup=False, highlight=False)
        return path
