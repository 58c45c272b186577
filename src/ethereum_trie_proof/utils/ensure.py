"""
Ensure (Assertion) Utilities
^^^^^^^^^^^^^^^^^^^^^^^^^^^^

.. contents:: Table of Contents
    :backlinks: none
    :local:

Introduction
------------

Guard helper used by the decoder and the verifier to reject a proof as soon
as one of its checks fails.
"""

from typing import Callable, Union


def ensure(
    value: bool, exception: Union[Callable[[], BaseException], BaseException]
) -> None:
    """
    Rejects a proof entry, key or value when one of the verifier's checks
    does not hold.

    The decoder and `Node.verify` pass a fully built `TrieProofException`
    (for example `HashMismatch` carrying both digests) so the caller gets
    the specific reason. Nothing is raised when `value` is truthy.

    Parameters
    ----------

    value :
        Outcome of the check, e.g. whether a proof entry hashes to the
        digest its parent committed to.

    exception :
        Exception instance (or class) describing the failed check.
    """
    if value:
        return
    raise exception  # type: ignore
