"""Bounded re-attempts for calls that fail with a known exception.

The Orderdaily API answers some requests with a transient HTTP 500.
``Client._send`` turns that status into :class:`~orderdaily.errors.ServerError`
and ``Client._request`` hands it to :func:`retry_call`, which runs the same
request once more before the error is reported.
"""

from __future__ import annotations

import time
from typing import Any, Callable, Tuple, Type


def retry_call(
    func: Callable[..., Any],
    *args: Any,
    exceptions: Tuple[Type[BaseException], ...] = (Exception,),
    attempts: int = 2,
    wait: float = 0.0,
    **kwargs: Any,
) -> Any:
    """Execute ``func`` and call it again if it raises one of ``exceptions``.

    Parameters
    ----------
    func: Callable[..., Any]
        The function to invoke.
    *args: Any
        Positional arguments passed to ``func``.
    exceptions: Tuple[Type[BaseException], ...]
        A tuple of exception classes that should trigger a retry.
    attempts: int
        The maximum number of attempts. The first call counts as the first
        attempt, so the default allows a single re-attempt.
    wait: float
        Seconds to sleep before each re-attempt. ``0`` retries immediately.
    **kwargs: Any
        Keyword arguments passed to ``func``.

    Returns
    -------
    Any
        Whatever ``func`` returns.

    Raises
    ------
    Exception
        Whatever the final attempt raises; earlier failures are discarded.
    """
    if attempts < 1:
        raise ValueError("attempts must be at least 1")
    for _ in range(attempts - 1):
        try:
            return func(*args, **kwargs)
        except exceptions:
            if wait > 0:
                time.sleep(wait)
    # final attempt propagates its exception
    return func(*args, **kwargs)
