class StakegenError(Exception):
    pass


class ArgumentError(StakegenError, ValueError):
    """An input violates a precondition (address width, integer range, bounds)."""
    pass


class ArtifactError(StakegenError):
    """A contract artifact could not be read or decoded."""
    pass


class ExecutionError(StakegenError):
    """The contract creation failed on the execution backend."""
    pass
