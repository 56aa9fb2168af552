"""
Secure-mode guard - Scoped access-check bypass for fixture teardown.

Reverting fixtures may need operations that are normally restricted
(deleting entities, for instance). The guard forces the secure-mode flag
on for the duration of a block and always restores the previous value.
"""

from collections.abc import Iterator
from contextlib import contextmanager

from .ports import SecureModeFlag


@contextmanager
def secure_mode(flag: SecureModeFlag) -> Iterator[None]:
    """
    Force the secure-mode flag on inside the block.

    The previous value is restored on exit, including when the block
    raises.

    Args:
        flag: Process-wide secure-mode flag
    """
    previous = flag.get()
    flag.set(True)
    try:
        yield
    finally:
        flag.set(previous)
