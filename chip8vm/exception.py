class Chip8Exception(Exception):
    """
    Base class for the errors that halt the machine.
    """


class IllegalOpCodeException(Chip8Exception):
    """
    A class to raise unknown op code exceptions.
    """
    def __init__(self, op_code, pc=None):
        self.op_code = op_code
        self.pc = pc
        message = "Unknown op-code: {:04X}".format(op_code)
        if pc is not None:
            message += " at PC {:04X}".format(pc)
        Chip8Exception.__init__(self, message)


class AddressOutOfRangeException(Chip8Exception):
    """
    Raised when memory is accessed outside of the 4K address space.
    """
    def __init__(self, address):
        self.address = address
        Chip8Exception.__init__(self, "Address out of range: {:X}".format(address))


class StackOverflowException(Chip8Exception):
    """
    Raised when a call would push past the end of the stack region.
    """
    def __init__(self, sp):
        self.sp = sp
        Chip8Exception.__init__(self, "Stack overflow: SP {:04X}".format(sp))


class StackUnderflowException(Chip8Exception):
    """
    Raised when a return is executed with an empty stack.
    """
    def __init__(self, sp):
        self.sp = sp
        Chip8Exception.__init__(self, "Stack underflow: SP {:04X}".format(sp))
