"""Reference data loader for states and districts."""

import logging
import threading
from concurrent.futures import ThreadPoolExecutor, wait

from apps.core.remote import RemoteError

from .models import GeoDistrict, GeoState

logger = logging.getLogger(__name__)


class ReferenceDataLoader:
    """Fetches the state and district lists once, concurrently.

    ``loading`` stays True until both requests have settled, successfully or
    not. On any failure both lists stay empty; there is no retry.
    """

    STATES_PATH = "states"
    DISTRICTS_PATH = "districts"

    def __init__(self, remote):
        self.remote = remote
        self.states: list[GeoState] = []
        self.districts: list[GeoDistrict] = []
        self._ready = threading.Event()
        self._started = False
        self._lock = threading.Lock()

    @property
    def loading(self) -> bool:
        return not self._ready.is_set()

    def start(self, background: bool = True) -> None:
        """Begin loading. Subsequent calls are ignored."""
        with self._lock:
            if self._started:
                return
            self._started = True

        if background:
            thread = threading.Thread(target=self.load, name="reference-data-loader", daemon=True)
            thread.start()
        else:
            self.load()

    def wait(self, timeout: float | None = None) -> bool:
        """Block until loading has finished. Returns False on timeout."""
        return self._ready.wait(timeout)

    def load(self) -> None:
        try:
            with ThreadPoolExecutor(max_workers=2, thread_name_prefix="reference-data") as pool:
                states_future = pool.submit(self.remote.get, self.STATES_PATH)
                districts_future = pool.submit(self.remote.get, self.DISTRICTS_PATH)
                wait([states_future, districts_future])

            states = [GeoState.from_dict(s) for s in states_future.result() or [] if isinstance(s, dict)]
            districts = [
                GeoDistrict.from_dict(d) for d in districts_future.result() or [] if isinstance(d, dict)
            ]
        except (RemoteError, TypeError) as e:
            logger.error(f"Error fetching states or districts: {e}")
        else:
            self.states = states
            self.districts = districts
            logger.info(f"Loaded {len(states)} states and {len(districts)} districts")
        finally:
            self._ready.set()

    def teardown(self) -> None:
        """Drop the lists and allow a later ``start`` to load them again."""
        with self._lock:
            self.states = []
            self.districts = []
            self._started = False
            self._ready.clear()
