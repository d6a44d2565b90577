"""nob context for passing state between commands."""

from typing import Optional

import click

from .arena import TempArena
from .config import NobConfig
from .containers import DA_INIT_CAP


class NobContext:
    def __init__(self):
        self.config: Optional[NobConfig] = None
        self.arena: Optional[TempArena] = None

    @property
    def init_cap(self) -> int:
        return self.config.da_init_cap if self.config is not None else DA_INIT_CAP

    def array(self, cls, items=()):
        """Build a dynamic array of ``cls`` sized from the configured ``da_init_cap``."""
        return cls(items, init_cap=self.init_cap)


pass_context = click.make_pass_decorator(NobContext, ensure=True)
