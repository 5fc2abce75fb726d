"""Expandable main memory stored in a left-leaning red-black tree."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntFlag
from typing import Iterator, Optional

ADDRESS_MAX = 0xFFFF

_RED = True
_BLACK = False


class MemoryConfig(IntFlag):
    """Configuration bits of a memory cell."""

    RESERVED = 0b00000001
    FLOW_SAFE = 0b00000010
    GPIO_SEND = 0b00000100
    GPIO_READ = 0b00001000
    GPIO_PULL = 0b00010000
    GPIO_ANALOG = 0b00100000


@dataclass
class _Node:
    address: int
    data: int = 0
    conf: int = 0
    color: bool = _RED
    left: Optional["_Node"] = None
    right: Optional["_Node"] = None


def _is_red(node: Optional[_Node]) -> bool:
    return node is not None and node.color == _RED


def _rotate_left(node: _Node) -> _Node:
    child = node.right
    assert child is not None
    node.right = child.left
    child.left = node
    return child


def _rotate_right(node: _Node) -> _Node:
    child = node.left
    assert child is not None
    node.left = child.right
    child.right = node
    return child


def _swap_colors(a: _Node, b: _Node) -> None:
    a.color, b.color = b.color, a.color


def _insert(address: int, node: Optional[_Node]) -> _Node:
    if node is None:
        return _Node(address)
    if node.address > address:
        node.left = _insert(address, node.left)
    elif node.address < address:
        node.right = _insert(address, node.right)

    if _is_red(node.right) and not _is_red(node.left):
        node = _rotate_left(node)
        _swap_colors(node, node.left)
    if _is_red(node.left) and _is_red(node.left.left):
        node = _rotate_right(node)
        _swap_colors(node, node.right)
    if _is_red(node.left) and _is_red(node.right):
        node.color = not node.color
        node.left.color = _BLACK
        node.right.color = _BLACK
    return node


def _smallest(node: _Node) -> _Node:
    while node.left is not None:
        node = node.left
    return node


def _remove(address: int, node: Optional[_Node]) -> Optional[_Node]:
    if node is None:
        return None
    if node.address > address:
        node.left = _remove(address, node.left)
    elif node.address < address:
        node.right = _remove(address, node.right)
    elif node.left is None:
        return node.right
    elif node.right is None:
        return node.left
    else:
        successor = _smallest(node.right)
        node.address = successor.address
        node.data = successor.data
        node.conf = successor.conf
        node.right = _remove(successor.address, node.right)
    return node


def _to_data(value: int) -> int:
    value &= 0xFFFFFFFF
    return value - 0x100000000 if value & 0x80000000 else value


def _check_address(address: int) -> int:
    if not 0 <= address <= ADDRESS_MAX:
        raise ValueError(f"address out of range: {address}")
    return address


class Memory:
    """Memory cells created on first access; unseen cells read as zero."""

    def __init__(self) -> None:
        self._root: Optional[_Node] = None
        self._cache: Optional[_Node] = None

    def _access(self, address: int) -> _Node:
        _check_address(address)
        if self._cache is not None and self._cache.address == address:
            return self._cache
        node = self._find(address)
        if node is None:
            self._root = _insert(address, self._root)
            self._root.color = _BLACK if self._root.color == _RED else self._root.color
            node = self._find(address)
            assert node is not None
        self._cache = node
        return node

    def _find(self, address: int) -> Optional[_Node]:
        node = self._root
        while node is not None and node.address != address:
            node = node.right if node.address < address else node.left
        return node

    def get(self, address: int) -> int:
        """Return the data stored at an address."""
        return self._access(address).data

    def set(self, address: int, value: int) -> None:
        """Store data at an address, wrapped to a signed 32-bit value."""
        self._access(address).data = _to_data(value)

    def get_conf(self, address: int) -> MemoryConfig:
        """Return the configuration bits of an address."""
        return MemoryConfig(self._access(address).conf)

    def set_conf(self, address: int, conf: int) -> None:
        """Store configuration bits for an address."""
        self._access(address).conf = int(conf) & 0xFF

    def clear(self, address: int) -> None:
        """Forget an address; it reads as zero afterwards."""
        _check_address(address)
        self._cache = None
        self._root = _remove(address, self._root)

    def addresses(self) -> Iterator[int]:
        """Yield the allocated addresses in ascending order."""
        stack: list[_Node] = []
        node = self._root
        while stack or node is not None:
            while node is not None:
                stack.append(node)
                node = node.left
            node = stack.pop()
            yield node.address
            node = node.right

    def __contains__(self, address: object) -> bool:
        return isinstance(address, int) and self._find(address) is not None

    def __len__(self) -> int:
        return sum(1 for _ in self.addresses())