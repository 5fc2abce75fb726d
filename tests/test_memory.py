import pytest

from threebc.memory import Memory, MemoryConfig


def _check_llrb(node):
    """Return black height, asserting left-leaning red-black rules."""
    if node is None:
        return 1
    assert not (node.right is not None and node.right.color)
    if node.color and node.left is not None:
        assert not node.left.color
    left = _check_llrb(node.left)
    right = _check_llrb(node.right)
    assert left == right
    return left + (0 if node.color else 1)


def test_unset_reads_zero():
    memory = Memory()
    assert memory.get(10) == 0
    assert memory.get_conf(10) == MemoryConfig(0)


def test_set_get_round_trip():
    memory = Memory()
    memory.set(5, 1234)
    memory.set(6, -77)
    assert memory.get(5) == 1234
    assert memory.get(6) == -77


def test_data_wraps_to_int32():
    memory = Memory()
    memory.set(1, 2**31)
    assert memory.get(1) == -(2**31)


def test_conf_flags():
    memory = Memory()
    memory.set_conf(3, MemoryConfig.GPIO_SEND | MemoryConfig.GPIO_PULL)
    conf = memory.get_conf(3)
    assert MemoryConfig.GPIO_SEND in conf
    assert MemoryConfig.GPIO_READ not in conf
    assert memory.get(3) == 0


def test_flag_values_stored():
    memory = Memory()
    memory.set_conf(1, MemoryConfig.GPIO_SEND)
    memory.set_conf(2, MemoryConfig.GPIO_ANALOG)
    assert memory.get_conf(1) == 0b00000100
    assert memory.get_conf(2) == 0b00100000


def test_addresses_sorted():
    memory = Memory()
    for address in [50, 3, 900, 17, 2]:
        memory.set(address, address)
    assert list(memory.addresses()) == [2, 3, 17, 50, 900]
    assert len(memory) == 5


def test_clear_forgets_value():
    memory = Memory()
    for address in range(1, 20):
        memory.set(address, address * 10)
    memory.clear(7)
    assert 7 not in memory
    assert memory.get(7) == 0
    for address in range(1, 20):
        if address != 7:
            assert memory.get(address) == address * 10


def test_clear_keeps_other_cells():
    memory = Memory()
    for address in [8, 4, 12, 2, 6, 10, 14]:
        memory.set(address, -address)
    memory.clear(8)
    assert list(memory.addresses()) == [2, 4, 6, 10, 12, 14]
    assert all(memory.get(a) == -a for a in [2, 4, 6, 10, 12, 14])


def test_tree_stays_balanced():
    memory = Memory()
    for address in range(200):
        memory.set(address, address)
    _check_llrb(memory._root)
    assert list(memory.addresses()) == list(range(200))


@pytest.mark.parametrize("address", [-1, 0x10000])
def test_address_out_of_range(address):
    memory = Memory()
    with pytest.raises(ValueError):
        memory.get(address)