"""
Hex-Prefix Keys
^^^^^^^^^^^^^^^

.. contents:: Table of Contents
    :backlinks: none
    :local:

Introduction
------------

Leaf and extension nodes store the part of the path they cover in the
"compact" (hex-prefix) encoding. The high nibble of the first byte carries
two flags: whether the node is a leaf, and whether the path has an odd number
of nibbles.

A path taken out of a node is handed to callers in its "bare" form: the
nibbles packed two per byte, with a zero nibble in front when the path has an
odd length.
"""

from dataclasses import dataclass
from typing import Tuple

from ethereum_types.bytes import Bytes
from ethereum_types.frozen import slotted_freezable

from .exceptions import MalformedEncoding
from .utils.ensure import ensure


def bytes_to_nibble_list(bytes_: Bytes) -> Bytes:
    """
    Converts a `Bytes` into to a sequence of nibbles (bytes with value < 16).

    Parameters
    ----------
    bytes_:
        The `Bytes` to convert.

    Returns
    -------
    nibble_list : `Bytes`
        The `Bytes` in nibble-list format.
    """
    nibble_list = bytearray(2 * len(bytes_))
    for byte_index, byte in enumerate(bytes_):
        nibble_list[byte_index * 2] = (byte & 0xF0) >> 4
        nibble_list[byte_index * 2 + 1] = byte & 0x0F
    return Bytes(nibble_list)


def nibble_list_to_bytes(nibbles: Bytes) -> Bytes:
    """
    Packs a nibble-list two nibbles per byte. Odd-length lists get a leading
    zero nibble.
    """
    if len(nibbles) % 2 == 1:
        nibbles = b"\x00" + nibbles

    packed = bytearray()
    for i in range(0, len(nibbles), 2):
        packed.append(16 * nibbles[i] + nibbles[i + 1])
    return Bytes(packed)


def nibble_list_to_compact(x: Bytes, is_leaf: bool) -> Bytes:
    """
    Compresses nibble-list into a standard byte array with a flag.

    A nibble-list is a list of byte values no greater than `15`. The flag is
    encoded in high nibble of the highest byte. The flag nibble can be broken
    down into two two-bit flags.

    Highest nibble::

        +---+---+----------+--------+
        | _ | _ | is_leaf | parity |
        +---+---+----------+--------+
          3   2      1         0


    The lowest bit of the nibble encodes the parity of the length of the
    remaining nibbles -- `0` when even and `1` when odd. The second lowest bit
    is used to distinguish leaf and extension nodes. The other two bits are not
    used.

    Parameters
    ----------
    x :
        Array of nibbles.
    is_leaf :
        True if this is part of a leaf node, or false if it is an extension
        node.

    Returns
    -------
    compressed : `bytearray`
        Compact byte array.
    """
    compact = bytearray()

    if len(x) % 2 == 0:  # ie even length
        compact.append(16 * (2 * is_leaf))
        for i in range(0, len(x), 2):
            compact.append(16 * x[i] + x[i + 1])
    else:
        compact.append(16 * ((2 * is_leaf) + 1) + x[0])
        for i in range(1, len(x), 2):
            compact.append(16 * x[i] + x[i + 1])

    return Bytes(compact)


def compact_to_nibble_list(compact: Bytes) -> Tuple[Bytes, bool]:
    """
    Inverse of `nibble_list_to_compact`.

    Parameters
    ----------
    compact :
        Hex-prefix encoded path, as stored in a leaf or extension node.

    Returns
    -------
    nibble_list : `Bytes`
        The path as a nibble-list, flag nibble (and padding) removed.
    is_leaf : `bool`
        True when the terminator flag is set.
    """
    ensure(len(compact) > 0, MalformedEncoding("empty hex-prefix key"))

    flag = compact[0] >> 4
    ensure(
        flag <= 3,
        MalformedEncoding(f"invalid hex-prefix flag nibble {flag:#x}"),
    )
    is_leaf = bool(flag & 2)
    nibbles = bytes_to_nibble_list(compact)

    if flag & 1:
        return nibbles[1:], is_leaf

    ensure(
        compact[0] & 0x0F == 0,
        MalformedEncoding("non-zero padding nibble in even-length key"),
    )
    return nibbles[2:], is_leaf


@slotted_freezable
@dataclass
class Key:
    """A decoded hex-prefix path."""

    nibbles: Bytes
    is_leaf: bool

    @classmethod
    def from_bytes_with_prefix(cls, raw: Bytes) -> "Key":
        """
        Decode the compact encoding found in a leaf or extension node.
        """
        nibbles, is_leaf = compact_to_nibble_list(raw)
        return cls(nibbles, is_leaf)

    def without_prefix(self) -> Bytes:
        """
        The bare path, packed into bytes.
        """
        return nibble_list_to_bytes(self.nibbles)

    def with_prefix(self) -> Bytes:
        """
        The compact encoding of this path.
        """
        return nibble_list_to_compact(self.nibbles, self.is_leaf)


def decode_prefixed(raw: Bytes) -> Tuple[Bytes, bool]:
    """
    Split a compact path into its bare form and the terminator flag.
    """
    key = Key.from_bytes_with_prefix(raw)
    return key.without_prefix(), key.is_leaf


def strip_prefix(raw: Bytes) -> Bytes:
    """
    Drop the flag nibble (and padding) of a compact path.
    """
    return Key.from_bytes_with_prefix(raw).without_prefix()
