# library_service.py
# -*- coding: utf-8 -*-
"""
Hosting layer around a ScanSession.

Every call takes the session lock, so the GUI worker threads and the
headless mode can share one session safely. Results are returned as
(success, payload) tuples where payload is an error message on failure.
"""
import json
import logging
import threading
from contextlib import contextmanager

import config
import game_launcher
from game_catalog import ScanSession, CatalogEntry
from emulator_utils.emulator_manager import EmulatorKind, parse_emulator_kind

log = logging.getLogger(__name__)
log.addHandler(logging.NullHandler())

BUSY_MESSAGE = "Library is busy, try again later"


class SessionBusyError(RuntimeError):
    pass


class LibraryService:
    def __init__(self, session=None, settings=None, lock_timeout=config.SESSION_LOCK_TIMEOUT_S):
        settings = settings or {}
        self.session = session or ScanSession(extra_config_roots=settings.get("extra_config_roots", []))
        self.emulator_paths = dict(settings.get("emulator_paths", {}))
        self.lock_timeout = lock_timeout
        self._lock = threading.Lock()

    @contextmanager
    def _locked(self):
        if not self._lock.acquire(timeout=self.lock_timeout):
            raise SessionBusyError(BUSY_MESSAGE)
        try:
            yield self.session
        finally:
            self._lock.release()

    def scan(self, kind):
        """Scans one emulator and returns (True, full catalog) or (False, error)."""
        try:
            kind = parse_emulator_kind(kind)
            with self._locked() as session:
                session.scan(kind)
                return True, session.get_games()
        except (ValueError, SessionBusyError) as e:
            log.warning(f"Scan failed: {e}")
            return False, str(e)

    def scan_all(self):
        """Resets the session and scans every supported emulator."""
        try:
            with self._locked() as session:
                session.reset()
                for kind in EmulatorKind:
                    session.scan(kind)
                return True, session.get_games()
        except SessionBusyError as e:
            log.warning(f"Scan failed: {e}")
            return False, str(e)

    def scan_directory(self, directory, kind):
        """Scans a folder picked by the user, tagging its ROMs with kind."""
        try:
            kind = parse_emulator_kind(kind)
            with self._locked() as session:
                session.scan_directory(directory, kind)
                return True, session.get_games()
        except (FileNotFoundError, ValueError, SessionBusyError) as e:
            log.warning(f"Scan of '{directory}' failed: {e}")
            return False, str(e)

    def get_catalog(self):
        try:
            with self._locked() as session:
                return True, session.get_games()
        except SessionBusyError as e:
            log.warning("Catalog requested while the library was busy.")
            return False, str(e)

    def add_manual_entry(self, title, path, kind):
        try:
            with self._locked() as session:
                return True, session.add_game(title, path, kind)
        except (FileNotFoundError, ValueError, SessionBusyError) as e:
            log.warning(f"Could not add '{title}': {e}")
            return False, str(e)

    def launch(self, entry):
        """Launches a CatalogEntry or its serialized dict form."""
        if isinstance(entry, dict):
            try:
                entry = CatalogEntry.from_dict(entry)
            except ValueError:
                return False, "Unknown emulator"
            except KeyError as e:
                return False, f"Invalid game entry, missing field {e}"
        return game_launcher.launch_game(entry, self.emulator_paths)

    def catalog_as_json(self, indent=2):
        """Returns (True, JSON text of the catalog) or (False, error)."""
        success, payload = self.get_catalog()
        if not success:
            return False, payload
        return True, entries_to_json(payload, indent)


def entries_to_json(entries, indent=2) -> str:
    return json.dumps([entry.to_dict() for entry in entries], indent=indent)
