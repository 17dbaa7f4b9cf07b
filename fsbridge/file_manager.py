"""Guest-visible file manager facade.

FileManager implements the guest verb set on top of GuestFilesystem. Host
failures from the storage backend are caught here and collapsed into the
narrow results guests expect: False, None or a zero size. Configuration
errors and unsupported features are not translated; they are logged and
raised so the guest call aborts.

Operations that accept an error out-pointer distinguish two cases on
failure. A NULL pointer means the guest does not want an error object and
gets False or None. A non-NULL pointer asks for an error object the bridge
cannot build, which raises UnsupportedFeatureError instead of quietly
returning a result without one.

Proxies returned to the guest (strings, lists, bytes, dicts, enumerators)
are handed to the session's AutoreleasePool.
"""

from __future__ import annotations

from typing import Any, Callable, TypeVar

from fsbridge.core.errors import ConfigurationError, PathEscapeError, UnsupportedFeatureError
from fsbridge.core.logging import BridgeLogger
from fsbridge.core.models import Outcome
from fsbridge.enumerator import DirectoryEnumerator
from fsbridge.filesystem import GuestFilesystem
from fsbridge.guest import NULL, AutoreleasePool, OutPointer
from fsbridge.paths import (
    VirtualPath,
    resolve_domain,
    resolve_temporary_path,
)

T = TypeVar("T")

FILE_SIZE_KEY = "fileSize"


class FileManager:
    """Facade translating guest file calls into storage calls.

    Holds no per-call state, so one instance can serve a whole session.

    Attributes:
        fs: GuestFilesystem used to resolve paths and reach storage
        pool: AutoreleasePool receiving every returned proxy
        logger: BridgeLogger for structured events
    """

    def __init__(
        self,
        fs: GuestFilesystem,
        pool: AutoreleasePool,
        logger: BridgeLogger | None = None,
    ) -> None:
        self.fs = fs
        self.pool = pool
        self.logger = logger if logger is not None else BridgeLogger()

    # ── Internal helpers ────────────────────────────────────────────

    def _run(
        self, operation: str, path: str | None, action: Callable[[], T]
    ) -> tuple[Outcome, T | None]:
        """Run a storage action, converting host failures into an Outcome."""
        try:
            value = action()
        except PathEscapeError as e:
            self.logger.log_security_event(
                "path_escape", {"operation": operation, "path": path}
            )
            return Outcome.failed(e), None
        except OSError as e:
            outcome = Outcome.failed(e)
            self.logger.log_operation_failed(operation, path, outcome.cause)
            return outcome, None

        size = None
        if isinstance(value, (bytes, list)):
            size = len(value)
        elif isinstance(value, int) and not isinstance(value, bool):
            size = value
        return Outcome.ok(size), value

    def _misconfigured(self, operation: str, reason: str) -> ConfigurationError:
        self.logger.log_unsupported(operation, reason)
        return ConfigurationError(f"{operation}: {reason}")

    def _unsupported(self, operation: str, reason: str) -> UnsupportedFeatureError:
        self.logger.log_unsupported(operation, reason)
        return UnsupportedFeatureError(f"{operation}: {reason}")

    def _require_no_error_request(self, operation: str, outcome: Outcome, error: OutPointer) -> None:
        if not outcome.success and not error.is_null:
            raise self._unsupported(
                operation, f"error objects are not implemented (cause: {outcome.cause})"
            )

    def _resolve(self, path: str) -> VirtualPath:
        return self.fs.resolve(path)

    # ── Working directory ──────────────────────────────────────────

    def current_directory_path(self) -> str:
        return self.pool.autorelease(str(self.fs.working_directory()))

    def change_current_directory_path(self, path: str | None) -> bool:
        """Change the working directory; False if path is not a directory."""
        if path is None:
            return False
        outcome, _ = self._run(
            "chdir", path, lambda: self.fs.change_working_directory(path)
        )
        self.logger.log_file_operation("chdir", path, outcome.success)
        return outcome.success

    # ── Existence queries ──────────────────────────────────────────

    def file_exists_at_path(self, path: str | None) -> bool:
        """Return True if a file or a directory exists at path."""
        if path is None:
            return False
        target = self._resolve(path)
        _, exists = self._run("exists", path, lambda: self.fs.storage.exists(target))
        result = bool(exists)
        self.logger.log_file_operation("exists", path, result)
        return result

    def file_exists_at_path_is_directory(
        self, path: str | None, is_dir: OutPointer = NULL
    ) -> bool:
        """Return whether path exists and write whether it is a directory.

        Anything that is not a regular file counts as a directory, so a
        missing path reports is_dir=True alongside exists=False.
        """
        if path is None:
            exists, directory = False, False
        else:
            target = self._resolve(path)
            storage = self.fs.storage
            _, pair = self._run(
                "exists", path, lambda: (storage.exists(target), not storage.is_file(target))
            )
            exists, directory = pair if pair is not None else (False, False)

        is_dir.write(directory)
        self.logger.log_file_operation("exists", path, exists, is_directory=directory)
        return exists

    def is_readable_file_at_path(self, path: str | None) -> bool:
        # Permissions are not modelled; every path is readable.
        self.logger.log_file_operation("readable", path, True)
        return True

    def file_modification_date(self) -> None:
        return None

    # ── File creation and removal ──────────────────────────────────

    def create_file_at_path(
        self,
        path: str | None,
        contents: bytes | None = None,
        attributes: dict[str, Any] | None = None,
    ) -> bool:
        """Create a file at path holding contents (empty if None).

        An existing regular file is left untouched and reported as success.
        A directory at path or a missing parent is a failure.

        Raises:
            ConfigurationError: If attributes is not None
        """
        if attributes is not None:
            raise self._misconfigured("create_file", "file attributes are not supported")
        if path is None:
            return False

        target = self._resolve(path)
        storage = self.fs.storage
        _, existing = self._run("create_file", path, lambda: storage.is_file(target))
        if existing:
            self.logger.log_file_operation("create_file", path, True, existed=True)
            return True

        data = contents if contents is not None else b""
        outcome, _ = self._run("create_file", path, lambda: storage.write_file(target, data))
        self.logger.log_file_operation("create_file", path, outcome.success, file_size=len(data))
        return outcome.success

    def remove_item_at_path(self, path: str | None, error: OutPointer = NULL) -> bool:
        """Remove the file or directory tree at path.

        The error pointer is never written.

        Raises:
            UnsupportedFeatureError: If removal fails and error is not NULL
        """
        if path is None:
            outcome = Outcome(success=False, cause="NullPath")
        else:
            target = self._resolve(path)
            outcome, _ = self._run("remove", path, lambda: self.fs.storage.remove(target))

        self._require_no_error_request("remove", outcome, error)
        self.logger.log_file_operation("remove", path, outcome.success)
        return outcome.success

    def copy_item_at_path(
        self, src: str | None, dst: str | None, error: OutPointer = NULL
    ) -> bool:
        """Copy the file at src to dst by reading it whole into memory.

        Raises:
            UnsupportedFeatureError: If the read or the write fails
        """
        if src is None or dst is None:
            return False

        source = self._resolve(src)
        destination = self._resolve(dst)
        storage = self.fs.storage

        outcome, data = self._run("copy", src, lambda: storage.read_file(source))
        if not outcome.success or data is None:
            raise self._unsupported("copy", f"cannot report read failure ({outcome.cause})")

        outcome, _ = self._run("copy", dst, lambda: storage.write_file(destination, data))
        if not outcome.success:
            raise self._unsupported("copy", f"cannot report write failure ({outcome.cause})")

        self.logger.log_file_operation(
            "copy", src, True, destination=dst, file_size=len(data)
        )
        return True

    # ── Directory creation ─────────────────────────────────────────

    def _create_directory(
        self,
        operation: str,
        path: str | None,
        with_intermediate_directories: bool,
        attributes: dict[str, Any] | None,
    ) -> bool:
        if attributes is not None:
            raise self._misconfigured(operation, "directory attributes are not supported")
        if not with_intermediate_directories:
            raise self._misconfigured(
                operation, "creating directories without intermediates is not supported"
            )
        if path is None:
            return False

        target = self._resolve(path)
        outcome, _ = self._run(operation, path, lambda: self.fs.storage.create_dir(target))
        self.logger.log_file_operation(operation, path, outcome.success)
        return outcome.success

    def create_directory_at_path(
        self,
        path: str | None,
        with_intermediate_directories: bool,
        attributes: dict[str, Any] | None = None,
        error: OutPointer = NULL,
    ) -> bool:
        """Create the directory at path and any missing parents.

        Raises:
            ConfigurationError: If attributes is given or intermediates is False
        """
        return self._create_directory(
            "create_directory", path, with_intermediate_directories, attributes
        )

    def create_directory_at_path_legacy(
        self,
        attributes: str | None,
        with_intermediate_directories: bool,
        path: dict[str, Any] | None,
        error: OutPointer = NULL,
    ) -> bool:
        """Legacy call shape with the argument labels swapped.

        Guest binaries built against this shape pass the directory path in
        the first slot (labelled attributes) and the attributes dictionary in
        the third slot (labelled path). Behaves exactly like
        create_directory_at_path once the slots are read correctly.
        """
        return self._create_directory(
            "create_directory_legacy", attributes, with_intermediate_directories, path
        )

    # ── Listing ────────────────────────────────────────────────────

    def enumerator_at_path(self, path: str | None) -> DirectoryEnumerator | None:
        """Return a recursive snapshot enumerator, or None on failure."""
        if path is None:
            return None
        target = self._resolve(path)
        outcome, entries = self._run(
            "enumerate", path, lambda: self.fs.storage.list_dir_recursive(target)
        )
        self.logger.log_file_operation(
            "enumerate", path, outcome.success, entry_count=outcome.size_or_count
        )
        if entries is None:
            return None
        return self.pool.autorelease(DirectoryEnumerator(entries))

    def directory_contents_at_path(self, path: str | None) -> list[str] | None:
        """Return the names of the immediate children of path, or None."""
        if path is None:
            return None
        target = self._resolve(path)
        outcome, names = self._run("list", path, lambda: self.fs.storage.list_dir(target))
        self.logger.log_file_operation(
            "list", path, outcome.success, entry_count=outcome.size_or_count
        )
        if names is None:
            return None
        return self.pool.autorelease(list(names))

    def contents_of_directory_at_path(
        self, path: str | None, error: OutPointer = NULL
    ) -> list[str] | None:
        """Like directory_contents_at_path, with an error pointer.

        Raises:
            UnsupportedFeatureError: If listing fails and error is not NULL
        """
        contents = self.directory_contents_at_path(path)
        if contents is None and not error.is_null:
            raise self._unsupported("list", "error objects are not implemented")
        return contents

    # ── Reading and attributes ─────────────────────────────────────

    def contents_at_path(self, path: str | None) -> bytes | None:
        """Return the whole contents of the file at the absolute path.

        Raises:
            ConfigurationError: If path is relative
        """
        if path is None:
            return None
        if not VirtualPath.parse(path).absolute:
            raise self._misconfigured("read", "relative paths are not supported")

        target = self._resolve(path)
        outcome, data = self._run("read", path, lambda: self.fs.storage.read_file(target))
        self.logger.log_file_operation(
            "read", path, outcome.success, file_size=outcome.size_or_count
        )
        if data is None:
            return None
        return self.pool.autorelease(data)

    def attributes_of_item_at_path(
        self, path: str | None, error: OutPointer = NULL
    ) -> dict[str, int]:
        """Return a mapping with the item's fileSize (0 if it cannot be read)."""
        size = 0
        if path is not None:
            target = self._resolve(path)
            outcome, value = self._run(
                "attributes", path, lambda: self.fs.storage.file_size(target)
            )
            if outcome.success and value is not None:
                size = value

        self.logger.log_file_operation("attributes", path, True, file_size=size)
        return self.pool.autorelease({FILE_SIZE_KEY: size})


# ── Search-path functions ──────────────────────────────────────────

def home_directory(fs: GuestFilesystem, pool: AutoreleasePool) -> str:
    return pool.autorelease(str(fs.home_directory()))


def temporary_directory(fs: GuestFilesystem, pool: AutoreleasePool) -> str:
    return pool.autorelease(str(resolve_temporary_path(fs.home_directory())))


def search_path_for_directories_in_domains(
    fs: GuestFilesystem,
    pool: AutoreleasePool,
    directory: int,
    domain_mask: int,
    expand_tilde: bool,
) -> list[str]:
    """Return a one-element list holding the requested directory.

    Raises:
        ConfigurationError: If domain_mask is not the user domain or
            expand_tilde is False
        UnsupportedFeatureError: If directory is not supported
    """
    resolved = resolve_domain(
        directory, domain_mask, expand_tilde, fs.home_directory(), fs.applications_dir
    )
    return pool.autorelease([str(resolved)])
