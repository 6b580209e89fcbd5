# debug.py
"""Component-switched debug logging for the machine internals.

Every module keeps a ``debug = Debug()`` and calls ``debug.log(component,
message)``. The switch map is shared by all instances, so ``--debug wheel``
on the command line reaches every module. Root logging is configured the
first time something is switched on; importing the simulator never does.
"""
from __future__ import annotations

import logging
from typing import Dict, Iterable

COMPONENTS = (
    "keyboard",
    "plugboard",
    "stator",
    "wheel",
    "reflector",
    "stepping",
    "machine",
)

LOG_FORMAT = "[%(asctime)s] [%(levelname)s] [%(name)s]: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class Debug:
    _switches: Dict[str, bool] = dict.fromkeys(COMPONENTS, False)
    _log_file: str | None = None
    _configured: bool = False

    def __init__(self, *, log_to: str | None = None) -> None:
        if log_to:
            Debug._log_file = log_to
        self.logger = logging.getLogger("ROTORSIM")
        self.enabled = True        # mute switch for this instance only

    @property
    def components(self) -> Dict[str, bool]:
        return Debug._switches

    @classmethod
    def _configure_root(cls) -> None:
        if cls._configured:
            return
        handlers: list[logging.Handler] = [logging.StreamHandler()]
        if cls._log_file:
            handlers.append(logging.FileHandler(cls._log_file, encoding="utf-8"))
        logging.basicConfig(
            level=logging.DEBUG,
            format=LOG_FORMAT,
            datefmt=DATE_FORMAT,
            handlers=handlers,
        )
        cls._configured = True

    # ── logging API ──────────────────────────────────────────────
    def active(self, component: str) -> bool:
        """Cheap check so callers can skip building expensive messages."""
        return self.enabled and Debug._switches.get(component, False)

    def log(self, component: str, message: str) -> None:
        if self.active(component):
            self.logger.debug("[%s] %s", component.upper(), message)

    # ── switches ─────────────────────────────────────────────────
    def _set(self, names: Iterable[str], state: bool) -> None:
        names = list(names)
        unknown = [n for n in names if n not in Debug._switches]
        if unknown:
            raise ValueError(
                f"Unknown debug component(s) {unknown}. Expected some of {list(COMPONENTS)}"
            )
        for n in names:
            Debug._switches[n] = state
        if state and names:
            Debug._configure_root()

    def enable(self, *components: str) -> None:
        self._set(components, True)

    def disable(self, *components: str) -> None:
        self._set(components, False)

    def toggle(self, component: str) -> None:
        self._set([component], not Debug._switches.get(component, False))

    def toggle_global(self, state: bool) -> None:
        """Mute or unmute this instance; the shared switches stay as they are."""
        self.enabled = state

    def status(self) -> Dict[str, bool]:
        return dict(Debug._switches)

    def __repr__(self) -> str:
        on = [k for k, v in Debug._switches.items() if v]
        return f"<Debug {self.logger.name} enabled={self.enabled} on={on}>"
