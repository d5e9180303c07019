from chip8vm.addresses import MAX_MEMORY, BYTE_MASK
from chip8vm.exception import AddressOutOfRangeException


class Memory(object):
    """
    The flat 4K address space of the Chip 8. Every access is bounds checked;
    an address outside of 0x000 - 0xFFF raises AddressOutOfRangeException
    rather than wrapping.
    """
    def __init__(self, size=MAX_MEMORY):
        self.memory_size = size
        self.memory_bytes = bytearray(size)

    def __len__(self):
        return self.memory_size

    def check_range(self, address, length=1):
        """
        Make sure that every address in [address, address + length) exists.

        :param address: the first address of the range
        :param length: the number of bytes in the range
        """
        if address < 0 or address >= self.memory_size:
            raise AddressOutOfRangeException(address)
        last_address = address + length - 1
        if last_address >= self.memory_size:
            raise AddressOutOfRangeException(last_address)

    def read_byte(self, address):
        self.check_range(address)
        return self.memory_bytes[address]

    def write_byte(self, address, value):
        self.check_range(address)
        self.memory_bytes[address] = value & BYTE_MASK

    def read_word(self, address):
        """
        Read the big-endian 16-bit word stored at address and address + 1.

        :param address: the address of the high byte
        :return: the word
        """
        self.check_range(address, 2)
        return (self.memory_bytes[address] << 8) | self.memory_bytes[address + 1]

    def read_bytes(self, address, length):
        if length == 0:
            return bytes()
        self.check_range(address, length)
        return bytes(self.memory_bytes[address:address + length])

    def load(self, offset, data):
        """
        Copy data into memory starting at offset. Nothing is written unless
        the whole image fits.

        :param offset: the location in memory at which to place the data
        :param data: the bytes to copy
        :return: the number of bytes written
        """
        data = bytes(data)
        if data:
            self.check_range(offset, len(data))
            self.memory_bytes[offset:offset + len(data)] = data
        return len(data)
