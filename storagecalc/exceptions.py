"""
Module: exceptions
Purpose: Custom exception hierarchy for storagecalc.
"""


class StorageCalcError(Exception):
    """Base exception for storagecalc."""

    pass


class CommandError(StorageCalcError):
    """A single input line could not be turned into a command."""

    pass


class UnknownCommandError(CommandError):
    pass


class MalformedCommandError(CommandError):
    pass


class DimensionError(StorageCalcError):
    pass


class AlreadyGroupedError(StorageCalcError):
    pass


class ProbeError(StorageCalcError):
    pass


class UnsupportedFormatError(ProbeError):
    pass


class OversizedImageError(ProbeError):
    pass
